"""
Yahoo Finance source: quote-summary and key-statistics pages (HTML scraping)
plus the v8 chart API for daily closing prices.
"""
