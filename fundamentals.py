"""
Short explanations of common fundamental-analysis terms, printed by `info`.
"""

from typing import Optional

from utils import log

RULE = "=" * 13

TERMS: dict[str, str] = {
    "pe_ratio": (
        "The P/E ratio compares the price per share with the company's earnings per share:\n\n"
        "- Stock price / EPS\n\n"
        "The lower, the better. A fairly priced company tends to have a P/E close to its growth rate."
    ),
    "equity": (
        "Shareholder's equity is what would be returned to the shareholders if all assets were\n"
        "liquidated and all debt paid off:\n\n"
        "- Total Assets - Total Liabilities\n\n"
        "The closer the equity is to the market price, the safer the investment."
    ),
    "market_value": (
        "Commonly referred to as 'Market Cap':\n\n"
        "- Current Share Price * Total Number of Outstanding Shares"
    ),
    "pb_ratio": (
        "For every $'P/B' paid, the company has $1 in book value:\n\n"
        "- Stock price / Book Value\n\n"
        "P/B ratios under 1 are usually considered solid, but a very low P/B often comes with low earnings."
    ),
    "bvps": (
        "Book Value per Share is the equity available to common shareholders divided by the number\n"
        "of outstanding shares. If it is higher than the current stock price, the stock is considered\n"
        "undervalued. A growing BVPS should be reflected in a rising stock price."
    ),
    "peg_ratio": (
        "The Price-to-Earnings-to-Growth ratio:\n\n"
        "- P/E ratio / earnings growth rate\n\n"
        "A result of 1 or lower says the stock is at par or undervalued given its growth.\n"
        "For dividend payers, use the dividend-adjusted variant:\n\n"
        "- P/E ratio / (earnings growth + dividend yield)"
    ),
    "debt_equity_ratio": (
        "Total Debt divided by Total Equity. Anything listed as debt on the balance sheet counts;\n"
        "for a more conservative view use Total Liabilities instead.\n\n"
        "The lower, the better."
    ),
    "return_on_equity": (
        "Return on Equity (ROE) is net income divided by shareholder's equity, a benchmark of how\n"
        "efficiently management turns equity financing into profit.\n\n"
        "A very high ROE can also signal heavy borrowing, since more debt means less equity."
    ),
    "return_on_assets": (
        "Return on Assets (ROA) is net income divided by total assets and shows how efficiently a\n"
        "company uses its assets to generate profit. Unlike ROE it accounts for debt, so the more\n"
        "leverage a company takes on, the further ROE rises above ROA.\n\n"
        "ROA is hard to compare across industries with different asset bases."
    ),
    "current_ratio": (
        "Current assets divided by current liabilities. Gives an idea how the company will handle\n"
        "debt in the next 12 months.\n\n"
        "The higher, the better. Above 1.50 is good."
    ),
    "assets": (
        "Total Current Assets are expected to be converted to cash within the next 12 months.\n\n"
        "Total Current Assets should be higher than Total Current Liabilities."
    ),
    "liabilities": (
        "Total Current Liabilities will likely be paid off within the next 12 months.\n\n"
        "Total Current Assets should be higher than Total Current Liabilities."
    ),
    "cash_flow_statement": (
        "Shows where money is generated, spent and employed:\n\n"
        "- Operating Activities (money generated by the business, the most important part)\n"
        "- Investing Activities (buildings, supplies, stakes in other companies)\n"
        "- Financing Activities (issuing shares or bonds)\n\n"
        "A strong net income may have come from selling stock or issuing bonds; this is where it shows."
    ),
    "income_investing": (
        "A strategy aiming at a continuous flow of dividends instead of selling stock.\n"
        "The dividend should beat inflation so purchasing power is kept.\n\n"
        "A reasonable target pays out about 1/3 of earnings and reinvests the other 2/3."
    ),
    "issuance_of_stock": (
        "When this number is negative, the company bought stock back."
    ),
    "cash_from_operating_activities": (
        "This number should be positive and show steady growth."
    ),
    "cash_from_financing_activities": (
        "This number should be negative: buybacks, dividends and paying off debt all show as negative.\n"
        "A positive value means the company paid no dividends, sold stock or took on debt."
    ),
    "cash_from_investing_activities": (
        "Capital expenditures and buying or selling assets show up here. It should be negative because\n"
        "the company invests. Beware of a company selling off many assets in a short period."
    ),
    "cost_of_capital": (
        "The minimum return needed to make a project or investment worthwhile. Internally financed\n"
        "projects carry the cost of equity, externally financed ones the cost of debt; most firms\n"
        "blend both into the WACC.\n\n"
        "The discount rate usually adds a risk premium and is therefore higher than the cost of capital.\n\n"
        "Source: https://www.investopedia.com/ask/answers/052715/what-difference-between-cost-capital-and-discount-rate.asp"
    ),
    "discount_rate": (
        "The interest rate used to bring future cash flows to present value in a DCF analysis.\n"
        "Many companies use their WACC, adding a risk premium for projects riskier than usual\n"
        "operations, so it is normally higher than the cost of capital.\n\n"
        "Source: https://www.investopedia.com/ask/answers/052715/what-difference-between-cost-capital-and-discount-rate.asp"
    ),
    "discounted_cash_flow": (
        "Discounted cash flow (DCF) values an investment by its expected future cash flows, discounted\n"
        "for the time value of money. If the DCF value is above the current cost, the opportunity should\n"
        "be considered. It is only as good as the cash-flow estimates behind it.\n\n"
        "Source: https://www.investopedia.com/terms/d/dcf.asp"
    ),
    "net_present_value": (
        "Net present value (NPV) is the present value of cash inflows minus the present value of outflows:\n\n"
        "- NPV = (Cash Flow / (1 + i)^t) - initial investment\n"
        "- i = Required return or discount rate\n"
        "- t = Number of time periods\n\n"
        "Projects with a positive NPV are generally worth undertaking.\n\n"
        "Source: https://www.investopedia.com/terms/n/npv.asp"
    ),
    "wacc": (
        "Weighted average cost of capital (WACC) is a firm's average after-tax cost of capital across\n"
        "common stock, preferred stock, bonds and other debt, each weighted by its share of financing.\n"
        "It is commonly used as the hurdle rate and discount rate for new projects.\n\n"
        "Source: https://www.investopedia.com/terms/w/wacc.asp"
    ),
}


def explain(term: Optional[str]) -> Optional[str]:
    """Explanation text for term, or None if the term is unknown."""
    if not term:
        return None
    return TERMS.get(term.strip().lower())


def print_term(term: Optional[str]) -> bool:
    """Print the explanation, or the supported terms when it is unknown."""
    text = explain(term)
    if text is None:
        log.warn("No term was found. The following are supported:")
        for name in TERMS:
            print(f"  - {name}")
        return False

    print(RULE)
    print(text)
    print(RULE)
    return True
