"""Tests for the glossary of fundamental-analysis terms."""

from fundamentals import TERMS, explain, print_term

EXPECTED_TERMS = {
    "pe_ratio", "equity", "market_value", "pb_ratio", "bvps", "peg_ratio",
    "debt_equity_ratio", "return_on_equity", "return_on_assets", "current_ratio",
    "assets", "liabilities", "cash_flow_statement", "income_investing",
    "issuance_of_stock", "cash_from_operating_activities",
    "cash_from_financing_activities", "cash_from_investing_activities",
    "cost_of_capital", "discount_rate", "discounted_cash_flow",
    "net_present_value", "wacc",
}


class TestGlossary:
    def test_all_terms_present(self):
        assert set(TERMS) == EXPECTED_TERMS

    def test_explain(self):
        assert "EPS" in explain("pe_ratio")
        assert explain("PE_RATIO") == explain("pe_ratio")

    def test_unknown(self):
        assert explain("beta") is None
        assert explain(None) is None

    def test_print_known(self, capsys):
        assert print_term("wacc") is True
        out = capsys.readouterr().out
        assert "Weighted average cost of capital" in out

    def test_print_unknown_lists_terms(self, capsys):
        assert print_term("beta") is False
        out = capsys.readouterr().out
        assert "No term was found. The following are supported:" in out
        assert "  - net_present_value" in out
