"""
Terminal Rendering

Text renderings of report tables and charts for the console.
"""

import polars as pl

from apre.console.pages import ChartData, ReportPage

BAR_WIDTH = 40
NO_DATA = "(no data)"


def render_table(df: pl.DataFrame) -> str:
    """Render every row of a report table."""
    if df.is_empty():
        return NO_DATA
    with pl.Config(tbl_rows=-1, tbl_hide_dataframe_shape=True, tbl_hide_column_data_types=True):
        return str(df)


def render_chart(chart: ChartData, width: int = BAR_WIDTH) -> str:
    """
    Render a chart as horizontal text bars.

    Bars are scaled to the largest value. Pie charts also show each
    slice's share of the total.
    """
    if not chart.values:
        return NO_DATA

    lines = [chart.label] if chart.label else []
    peak = max(abs(v) for v in chart.values) or 1
    total = sum(chart.values) or 1
    label_width = max(len(label) for label in chart.labels)

    for label, value in zip(chart.labels, chart.values):
        bar = "#" * int(round(abs(value) / peak * width))
        line = f"{label:<{label_width}} | {bar} {value:g}"
        if chart.type == "pie":
            line += f" ({value / total * 100:.1f}%)"
        lines.append(line)

    return "\n".join(lines)


def render_page(page: ReportPage) -> str:
    """Render a page's title, table and chart."""
    if page.error:
        return f"Error: {page.error}"
    if not page.has_data:
        return f"{page.report_title}\n{NO_DATA}" if page.report_title else NO_DATA

    return "\n\n".join([
        page.report_title,
        render_table(page.table()),
        render_chart(page.chart),
    ])
