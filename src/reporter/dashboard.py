"""
Dashboard Page Builder

Renders the dashboard as a single HTML document:
- Header, country tabs, language toggle and refresh control
- Overview cards and the brand / non-brand split
- Keyword-type pie charts with legends
- Paginated competitor and long-tail keyword tables
- Loading and error pages
"""

import html
import logging
from typing import Dict, List, Optional
from urllib.parse import urlencode

from .charts import ChartGenerator
from .formatting import (
    difficulty_band,
    difficulty_color,
    format_currency,
    format_number,
    format_percent,
    format_score,
    position_band,
    position_color,
)
from src.dashboard.pagination import PAGE_SIZE_OPTIONS, Paginator
from src.models import COUNTRIES, KeywordTypeShare, LanguageVariant, Selection

logger = logging.getLogger(__name__)


STYLES = """
body { font-family: -apple-system, "Segoe UI", Roboto, sans-serif; margin: 0; background: #f9fafb; color: #111827; }
header { background: white; padding: 1.5rem; box-shadow: 0 2px 6px rgba(0,0,0,.08); }
header h1 { color: #061ab1; margin: 0; font-size: 1.5rem; }
header p { color: #4b5563; margin: .25rem 0 0 0; }
nav.tabs { background: white; border-bottom: 1px solid #e5e7eb; display: flex; gap: .25rem; padding: 0 1.5rem; }
nav.tabs a { padding: .9rem 1.4rem; color: #4b5563; text-decoration: none; border-bottom: 3px solid transparent; }
nav.tabs a.active { color: #061ab1; border-color: #061ab1; background: #eff6ff; }
.toolbar { display: flex; justify-content: space-between; align-items: center; padding: .75rem 1.5rem; border-bottom: 1px solid #e5e7eb; }
.toolbar .counts { color: #6b7280; font-size: .8rem; margin-left: .75rem; }
main { max-width: 80rem; margin: 0 auto; padding: 1.5rem; }
.cards { display: grid; grid-template-columns: repeat(4, 1fr); gap: 1.25rem; margin-bottom: 1.25rem; }
.card, .panel { background: white; border-radius: .5rem; box-shadow: 0 1px 3px rgba(0,0,0,.1); padding: 1.25rem; }
.card h3 { font-size: .85rem; color: #6b7280; margin: 0 0 .5rem 0; font-weight: 500; }
.card .value { font-size: 1.9rem; font-weight: 700; color: #061ab1; }
.card .hint { font-size: .75rem; color: #9ca3af; }
.dot { display: inline-block; width: .9rem; height: .9rem; border-radius: 50%; margin-left: .5rem; }
.split { display: grid; grid-template-columns: 1fr 1fr; gap: 1rem; text-align: center; }
.charts { display: grid; grid-template-columns: 1fr 1fr; gap: 1.25rem; }
.chart { max-width: 200px; margin: 0 auto; }
.legend { display: grid; grid-template-columns: 1fr 1fr; gap: .4rem; margin-top: 1rem; font-size: .85rem; }
.swatch { display: inline-block; width: .7rem; height: .7rem; border-radius: 50%; margin-right: .4rem; }
table { width: 100%; border-collapse: collapse; font-size: .875rem; }
th { text-align: left; background: #f3f4f6; color: #6b7280; font-weight: 500; padding: .6rem; }
td { padding: .6rem; border-top: 1px solid #f3f4f6; }
.badge { color: white; border-radius: 999px; padding: .1rem .55rem; font-size: .75rem; font-weight: 600; }
.pagination { display: flex; justify-content: space-between; align-items: center; padding: .75rem 0 0 0; font-size: .85rem; }
.pagination a, .pagination span.page { border: 1px solid #d1d5db; border-radius: .25rem; padding: .2rem .6rem; margin: 0 .1rem; color: #111827; text-decoration: none; }
.pagination span.current { background: #061ab1; color: white; border-color: #061ab1; }
.pagination span.disabled { opacity: .5; }
.no-data { text-align: center; color: #6b7280; padding: 1rem; }
.state { display: flex; align-items: center; justify-content: center; height: 100vh; text-align: center; }
button { background: #061ab1; color: white; border: none; border-radius: .375rem; padding: .5rem 1rem; cursor: pointer; }
"""


class DashboardPageBuilder:
    """
    Builds the dashboard HTML for a controller's current state.

    Links carry the whole page state in the query string so every view
    is addressable: country, variant, kw_page, kw_size, comp_page,
    comp_size.
    """

    def __init__(self, base_path: str = "/", refresh_path: str = "/refresh"):
        self.base_path = base_path
        self.refresh_path = refresh_path
        self.charts = ChartGenerator()

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def build(self, controller, selection: Optional[Selection] = None) -> str:
        """
        Build the page for whatever state the controller is in.

        Args:
            controller: DashboardController
            selection: Selection to link from (defaults to the controller's)
        """
        selection = selection or controller.selection

        if controller.error:
            return self.build_error(controller.error, selection)
        if controller.is_loading or controller.dataset is None:
            return self.build_loading(selection)

        view = controller.view
        state = {
            "kw_page": controller.keywords.current_page,
            "kw_size": controller.keywords.page_size,
            "comp_page": controller.competitors.current_page,
            "comp_size": controller.competitors.page_size,
        }

        sections = [
            self._build_header(),
            self._build_country_tabs(selection),
            self._build_toolbar(selection, view),
            "<main>",
            self._build_overview(selection, view),
            self._build_keyword_types(view),
            self._build_competitors(selection, controller.competitors, state),
            self._build_long_tail(selection, controller.keywords, state),
            "</main>",
        ]
        return self._wrap_html(sections, "Multi-Country SEO Dashboard")

    def build_loading(self, selection: Selection) -> str:
        """Loading indicator that re-requests the page shortly."""
        body = f'''
        <div class="state">
            <div>
                <p style="font-size: 1.25rem; font-weight: 600;">Loading SEO Dashboard...</p>
                <p style="color: #6b7280;">Fetching data from APIs</p>
            </div>
        </div>
        '''
        refresh = f'<meta http-equiv="refresh" content="2;url={html.escape(self.url_for(selection))}">'
        return self._wrap_html([body], "Loading - SEO Dashboard", head_extra=refresh)

    def build_error(self, message: str, selection: Selection) -> str:
        """Full-page error with a retry button."""
        body = f'''
        <div class="state">
            <div>
                <p style="font-size: 1.25rem; font-weight: 600; color: #dc2626;">{html.escape(message)}</p>
                {self._refresh_form(selection, "Retry")}
            </div>
        </div>
        '''
        return self._wrap_html([body], "Error - SEO Dashboard")

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _build_header(self) -> str:
        return '''
        <header>
            <h1>Multi-Country SEO Dashboard</h1>
            <p>Comprehensive keyword analysis across European markets</p>
        </header>
        '''

    def _build_country_tabs(self, selection: Selection) -> str:
        tabs = []
        for country in COUNTRIES:
            css = ' class="active"' if country.code == selection.country_code else ""
            url = self.url_for(Selection(country.code, selection.variant))
            tabs.append(f'<a href="{html.escape(url)}"{css}>{html.escape(country.name)}</a>')
        return f'<nav class="tabs">{"".join(tabs)}</nav>'

    def _build_toolbar(self, selection: Selection, view) -> str:
        toggled = Selection(selection.country_code, selection.variant.toggled)
        label = "Native" if selection.variant is LanguageVariant.NATIVE else "English"
        switch_to = "English" if selection.variant is LanguageVariant.NATIVE else "Native"
        return f'''
        <div class="toolbar">
            <div>
                <strong>Language:</strong> {label} ({html.escape(selection.composite_key)})
                <a href="{html.escape(self.url_for(toggled))}">Switch to {switch_to}</a>
                <span class="counts">{len(view.long_tail_keywords)} keywords &bull; {len(view.competitors)} competitors</span>
            </div>
            {self._refresh_form(selection, "Refresh Data")}
        </div>
        '''

    def _build_overview(self, selection: Selection, view) -> str:
        info = view.domain_info
        country = selection.country
        country_name = country.name if country else selection.country_code

        total = info.total_keywords if info else 0
        brand = info.total_keywords_brand if info else 0
        non_brand = info.total_keywords_non_brand if info else 0
        diff_brand = info.avg_difficulty_brand if info else 0
        diff_non_brand = info.avg_difficulty_non_brand if info else 0
        opportunities = info.nb_big_kw_opportunities if info else 0
        domain_name = info.domain_name if info else ""

        return f'''
        <section>
            <h2>Overview - {html.escape(country_name)}</h2>
            <div class="cards">
                <div class="card" id="total-keywords">
                    <h3>Total Keywords</h3>
                    <div class="value">{format_number(total)}</div>
                    <div class="hint">{html.escape(domain_name)}</div>
                </div>
                {self._difficulty_card("brand-difficulty", "Brand Difficulty", diff_brand)}
                {self._difficulty_card("non-brand-difficulty", "Non-Brand Difficulty", diff_non_brand)}
                <div class="card" id="big-opportunities">
                    <h3>Big Opportunities</h3>
                    <div class="value">{format_number(opportunities)}</div>
                    <div class="hint">High-volume, low-competition</div>
                </div>
            </div>
            <div class="panel">
                <h3>Brand vs Non-Brand Split</h3>
                <div class="split">
                    <div>
                        <div class="value">{format_number(brand)}</div>
                        <div>Brand Keywords</div>
                        <div class="hint">{format_percent(info.brand_share if info else 0)}</div>
                    </div>
                    <div>
                        <div class="value">{format_number(non_brand)}</div>
                        <div>Non-Brand Keywords</div>
                        <div class="hint">{format_percent(info.non_brand_share if info else 0)}</div>
                    </div>
                </div>
            </div>
        </section>
        '''

    def _difficulty_card(self, element_id: str, title: str, difficulty: float) -> str:
        return f'''
                <div class="card" id="{element_id}">
                    <h3>{title}</h3>
                    <div class="value" style="color: #111827;">{format_score(difficulty)}<span class="dot" data-band="{difficulty_band(difficulty)}" style="background: {difficulty_color(difficulty)}"></span></div>
                    <div class="hint">Avg score</div>
                </div>
        '''

    def _build_keyword_types(self, view) -> str:
        return f'''
        <section>
            <h2>Keyword Types - {html.escape(view.composite_key)}</h2>
            <div class="charts">
                {self._pie_panel("Brand Keywords Distribution", view.brand_keywords)}
                {self._pie_panel("Non-Brand Keywords Distribution", view.non_brand_keywords)}
            </div>
        </section>
        '''

    def _pie_panel(self, title: str, shares) -> str:
        chart = self.charts.generate_pie_chart([(s.percent, s.color) for s in shares])
        return f'''
                <div class="panel">
                    <h3>{title}</h3>
                    <div class="chart">{chart}</div>
                    <div class="legend">{self._legend(shares)}</div>
                </div>
        '''

    def _legend(self, shares: List[KeywordTypeShare]) -> str:
        return "".join(
            f'<div><span class="swatch" style="background: {s.color}"></span>'
            f'{html.escape(s.name)}: {format_score(s.percent)}%</div>'
            for s in shares
        )

    def _build_competitors(self, selection: Selection, paginator: Paginator, state: Dict) -> str:
        rows = ""
        for c in paginator.items:
            relevance = (c.competitor_relevance or 0) * 100
            rows += f'''
                <tr>
                    <td><strong>{html.escape(c.domain)}</strong></td>
                    <td>{relevance:.0f}%</td>
                    <td>{format_number(c.common_keywords)}</td>
                    <td>{format_number(c.organic_keywords)}</td>
                    <td>{format_number(c.organic_traffic)}</td>
                    <td>{format_currency(c.organic_cost)}</td>
                    <td>{format_number(c.google_ads_keywords)}</td>
                </tr>'''

        country = selection.country
        return f'''
        <section>
            <h2>Competitors - {html.escape(country.name if country else selection.country_code)}</h2>
            <div class="panel">
                <table id="competitors">
                    <thead><tr>
                        <th>Domain</th><th>Relevance</th><th>Common KW</th><th>Organic KW</th>
                        <th>Traffic</th><th>Traffic Cost</th><th>Ads KW</th>
                    </tr></thead>
                    <tbody>{rows}</tbody>
                </table>
                {self._pagination_controls(selection, paginator, state, "comp")}
            </div>
        </section>
        '''

    def _build_long_tail(self, selection: Selection, paginator: Paginator, state: Dict) -> str:
        rows = ""
        for k in paginator.items:
            rows += f'''
                <tr>
                    <td><strong>{html.escape(k.keyword)}</strong></td>
                    <td><span class="badge" data-band="{position_band(k.position)}" style="background: {position_color(k.position)}">{k.position}</span></td>
                    <td>{format_number(k.volume)}</td>
                    <td><span class="badge" data-band="{difficulty_band(k.difficulty)}" style="background: {difficulty_color(k.difficulty)}">{format_score(k.difficulty)}</span></td>
                    <td>{format_number(k.traffic)}</td>
                    <td>${k.cpc:.2f}</td>
                    <td>{html.escape(k.intent)}</td>
                </tr>'''

        return f'''
        <section>
            <h2>Long-Tail Keywords - {html.escape(selection.composite_key)}</h2>
            <div class="panel">
                <table id="long-tail-keywords">
                    <thead><tr>
                        <th>Keyword</th><th>Position</th><th>Volume</th><th>Difficulty</th>
                        <th>Traffic</th><th>CPC</th><th>Intent</th>
                    </tr></thead>
                    <tbody>{rows}</tbody>
                </table>
                {self._pagination_controls(selection, paginator, state, "kw")}
            </div>
        </section>
        '''

    def _pagination_controls(
        self,
        selection: Selection,
        paginator: Paginator,
        state: Dict,
        prefix: str,
    ) -> str:
        """Prev / page window / next links plus page-size choices."""
        if paginator.total_items == 0:
            return '<div class="no-data">No data available</div>'

        def link(page: int, text: str) -> str:
            url = self.url_for(selection, {**state, f"{prefix}_page": page})
            return f'<a href="{html.escape(url)}">{text}</a>'

        parts = []
        if paginator.has_previous:
            parts.append(link(paginator.current_page - 1, "Prev"))
        else:
            parts.append('<span class="page disabled">Prev</span>')

        numbers = paginator.page_numbers()
        if numbers and numbers[0] > 1:
            parts.append(link(1, "1"))
            if numbers[0] > 2:
                parts.append("<span>...</span>")
        for page in numbers:
            if page == paginator.current_page:
                parts.append(f'<span class="page current">{page}</span>')
            else:
                parts.append(link(page, str(page)))
        if numbers and numbers[-1] < paginator.total_pages:
            if numbers[-1] < paginator.total_pages - 1:
                parts.append("<span>...</span>")
            parts.append(link(paginator.total_pages, str(paginator.total_pages)))

        if paginator.has_next:
            parts.append(link(paginator.current_page + 1, "Next"))
        else:
            parts.append('<span class="page disabled">Next</span>')

        sizes = " ".join(
            f"<strong>{size}</strong>" if size == paginator.page_size else
            f'<a href="{html.escape(self.url_for(selection, {**state, f"{prefix}_size": size, f"{prefix}_page": 1}))}">{size}</a>'
            for size in PAGE_SIZE_OPTIONS
        )

        return f'''
                <div class="pagination">
                    <div>Show: {sizes} per page &middot;
                        Showing {paginator.start_item} to {paginator.end_item} of {paginator.total_items}</div>
                    <div>{"".join(parts)}</div>
                </div>
        '''

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def url_for(self, selection: Selection, state: Optional[Dict] = None) -> str:
        params = {"country": selection.country_code, "variant": selection.variant.value}
        if state:
            params.update(state)
        return f"{self.base_path}?{urlencode(params)}"

    def refresh_url(self, selection: Selection) -> str:
        params = {"country": selection.country_code, "variant": selection.variant.value}
        return f"{self.refresh_path}?{urlencode(params)}"

    def _refresh_form(self, selection: Selection, label: str) -> str:
        return f'''
            <form method="post" action="{html.escape(self.refresh_url(selection))}" style="display: inline;">
                <button type="submit">{label}</button>
            </form>
        '''

    def _wrap_html(self, sections: list, title: str, head_extra: str = "") -> str:
        """Wrap sections in HTML document."""
        content = "\n".join(sections)
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    {head_extra}
    <title>{html.escape(title)}</title>
    <style>{STYLES}</style>
</head>
<body>
    {content}
</body>
</html>"""
