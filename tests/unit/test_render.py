"""
Unit Tests - Terminal Rendering
"""
import polars as pl

from apre.console.pages import ChartData, FeedbackBySalespersonPage
from apre.console.render import NO_DATA, render_chart, render_page, render_table
from apre.database.models import SalespersonFeedback


class TestRenderChart:
    """Tests for render_chart"""

    def test_bars_scale_to_peak(self):
        chart = ChartData(type="bar", label="Sales", labels=["A", "B"], values=[10, 5])

        lines = render_chart(chart, width=10).splitlines()

        assert lines[0] == "Sales"
        assert lines[1] == "A | ########## 10"
        assert lines[2] == "B | ##### 5"

    def test_pie_shows_share(self):
        chart = ChartData(type="pie", labels=["A", "B"], values=[3, 1])

        lines = render_chart(chart, width=4).splitlines()

        assert lines[0].endswith("(75.0%)")
        assert lines[1].endswith("(25.0%)")

    def test_labels_are_aligned(self):
        chart = ChartData(type="bar", labels=["Short", "Much longer"], values=[1, 1])

        lines = render_chart(chart, width=2).splitlines()

        assert lines[0].index("|") == lines[1].index("|")

    def test_empty_chart(self):
        assert render_chart(ChartData(type="bar")) == NO_DATA


class TestRenderTable:
    """Tests for render_table"""

    def test_all_rows_rendered(self):
        df = pl.DataFrame({"salesperson": [f"Person {i}" for i in range(30)]})

        text = render_table(df)

        assert "Person 0" in text
        assert "Person 29" in text

    def test_empty_table(self):
        assert render_table(pl.DataFrame({"salesperson": []})) == NO_DATA


class TestRenderPage:
    """Tests for render_page"""

    def _page(self):
        page = FeedbackBySalespersonPage(client=None)
        page.rows = [SalespersonFeedback(channel_name="Online", total_sales=2, average_rating=4.5)]
        page.chart = page.build_chart("Roger Rabbit", page.rows)
        page.report_title = "Feedback by Salesperson - Roger Rabbit"
        return page

    def test_page_sections(self):
        text = render_page(self._page())

        assert text.startswith("Feedback by Salesperson - Roger Rabbit")
        assert "Online Total Sales" in text
        assert "Feedback for Roger Rabbit" in text

    def test_page_error(self):
        page = self._page()
        page.error = "Internal Server Error"

        assert render_page(page) == "Error: Internal Server Error"

    def test_page_without_rows(self):
        page = FeedbackBySalespersonPage(client=None)

        assert render_page(page) == NO_DATA
