"""
Cyber Law Search - Streamlit Application

Browse cybersecurity law sections with highlighted search, and follow
cybersecurity news updates.
"""

import logging

import streamlit as st

from config import Settings
from highlight import SearchOptions, highlight_preview, highlight_text, segments_to_html
from laws_data import LAWS
from news_service import NewsAPIConfig, NewsAPIError, fetch_cybersecurity_news
from search import (
    LawIndex,
    SearchSession,
    filter_laws,
    get_related_laws,
    get_unique_categories,
    search_articles,
    search_laws,
    sort_laws,
)
from search_cache import SearchCache
from text_processing import extract_terms, sanitize_query
from time_utils import format_readable_date, format_relative_time

logger = logging.getLogger(__name__)

# ─── Page Config ─────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Cyber Law Search",
    page_icon="🛡️",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ─── Custom CSS ──────────────────────────────────────────────────────────────

st.markdown("""
<style>
    .law-card, .news-card {
        background-color: #f8f9fa;
        border-radius: 10px;
        padding: 20px;
        margin-bottom: 15px;
        border-left: 4px solid #1E88E5;
    }
    .law-title, .news-title {
        font-size: 1.2em;
        font-weight: 600;
        color: #1E88E5;
        margin-bottom: 5px;
    }
    .law-meta, .news-meta {
        color: #666;
        font-size: 0.9em;
        margin-bottom: 10px;
    }
    .law-theory, .news-snippet {
        color: #333;
        line-height: 1.6;
    }
    .category-badge {
        background-color: #4CAF50;
        color: white;
        padding: 2px 8px;
        border-radius: 12px;
        font-size: 0.8em;
    }
    mark {
        background-color: #fff176;
        padding: 0 2px;
        border-radius: 3px;
    }
</style>
""", unsafe_allow_html=True)


# ─── Resources ───────────────────────────────────────────────────────────────

@st.cache_resource
def load_settings() -> Settings:
    settings = Settings()
    logging.basicConfig(
        level=settings.logging_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return settings


@st.cache_resource
def load_law_index() -> LawIndex:
    """Index the bundled laws for relevance ordering."""
    index = LawIndex()
    index.index(LAWS)
    return index


@st.cache_resource
def load_search_cache(max_entries: int, ttl: float) -> SearchCache:
    return SearchCache(max_entries=max_entries, default_ttl=ttl)


def mark(text: str, terms: list[str], options: SearchOptions) -> str:
    return segments_to_html(highlight_text(text, terms, options))


# ─── Laws View ───────────────────────────────────────────────────────────────

SORT_CHOICES = {
    "Relevance": None,
    "Act": "act",
    "Section": "section",
    "Category": "category",
    "Last updated": "last_updated",
}


def render_laws(settings: Settings, cache: SearchCache):
    st.title("🛡️ Cyber Law Search")
    st.markdown("Search sections of the Information Technology Act, 2000")

    with st.sidebar:
        st.subheader("Filters")
        categories = ["All Categories"] + get_unique_categories(LAWS)
        selected_category = st.selectbox("Category", categories)
        sort_label = st.selectbox("Sort by", list(SORT_CHOICES))
        whole_words = st.checkbox("Whole words only")
        case_sensitive = st.checkbox("Case sensitive")

    options = SearchOptions(
        case_sensitive=case_sensitive,
        whole_words=whole_words,
        debounce_delay=settings.debounce_delay_seconds,
    )

    query = st.text_input(
        "Search",
        placeholder="Search acts, sections, keywords or categories...",
        label_visibility="collapsed",
    )

    session = SearchSession(
        LAWS,
        search_fn=search_laws,
        min_query_length=options.min_query_length,
        cache=cache,
        scope="laws",
        initial_query=query,
    )

    results = session.results
    if selected_category != "All Categories":
        results = filter_laws(results, category=selected_category)

    sort_by = SORT_CHOICES[sort_label]
    if sort_by is None:
        if session.has_active_search:
            results = load_law_index().rank(session.sanitized_query, results)
    else:
        results = sort_laws(results, sort_by=sort_by)

    stats = session.stats
    if stats.has_query:
        st.markdown(f"### Found {len(results)} of {stats.total} sections")
    else:
        st.markdown(f"### {len(results)} sections")

    if not results:
        st.info("No laws found. Try different keywords or adjust filters.")
    for law in results:
        render_law_card(law, session.search_terms, options)


def render_law_card(law, terms: list[str], options: SearchOptions):
    """Render a law section as a styled card with highlighted matches."""
    category = (
        f'<span class="category-badge">{mark(law.category, terms, options)}</span>'
        if law.category else ""
    )
    updated = format_readable_date(law.last_updated) if law.last_updated else "N/A"

    with st.container():
        st.markdown(f"""
        <div class="law-card">
            <div class="law-title">{mark(law.section, terms, options)}</div>
            <div class="law-meta">
                📜 {mark(law.act, terms, options)} |
                📅 {updated}
                {category}
            </div>
            <div class="law-theory">{mark(law.theory, terms, options)}</div>
        </div>
        """, unsafe_allow_html=True)

        with st.expander("Keywords and related sections"):
            st.markdown(
                "**Keywords:** " + ", ".join(mark(k, terms, options) for k in law.keywords),
                unsafe_allow_html=True,
            )
            related = get_related_laws(law, LAWS)
            if related:
                st.markdown("**Related:** " + ", ".join(r.section for r in related))


# ─── Updates View ────────────────────────────────────────────────────────────

def load_news(settings: Settings, page: int):
    """Fetch a page into session state. The spinner covers the loading state."""
    try:
        with st.spinner("Fetching cybersecurity news..."):
            articles = fetch_cybersecurity_news(
                page=page, config=NewsAPIConfig.from_settings(settings)
            )
    except NewsAPIError as exc:
        logger.warning("News fetch failed (%s): %s", exc.error_type, exc)
        st.session_state.news_status = "error"
        st.session_state.news_error = exc
        return

    st.session_state.news_articles = articles
    st.session_state.news_status = "success"
    st.session_state.news_error = None


def render_updates(settings: Settings):
    st.title("📰 Cybersecurity Updates")

    if "news_status" not in st.session_state:
        load_news(settings, page=1)

    if st.button("Refresh News"):
        load_news(settings, page=1)

    if st.session_state.news_status == "error":
        error = st.session_state.news_error
        st.error(f"{error} ({error.error_type})")
        return

    articles = st.session_state.get("news_articles", [])
    query = st.text_input(
        "Search news",
        placeholder="Filter by title, source, author...",
        label_visibility="collapsed",
    )
    results = search_articles(query, articles)
    st.caption(f"Showing {len(results)} of {len(articles)} articles")

    options = SearchOptions()
    terms = extract_terms(sanitize_query(query))
    for article in results:
        preview = highlight_preview(article.description, terms, options=options)
        st.markdown(f"""
        <div class="news-card">
            <div class="news-title">{mark(article.title, terms, options)}</div>
            <div class="news-meta">
                🗞️ {mark(article.source.name, terms, options)} |
                🕒 {format_relative_time(article.published_at)}
            </div>
            <div class="news-snippet">{segments_to_html(preview.segments)}</div>
        </div>
        """, unsafe_allow_html=True)
        st.markdown(f"[Read more]({article.url})")


# ─── Main App ────────────────────────────────────────────────────────────────

def main():
    settings = load_settings()
    cache = load_search_cache(settings.cache_max_entries, settings.cache_ttl_seconds)

    with st.sidebar:
        st.title("🛡️ Cyber Law")
        view = st.radio("View", ["Laws", "Updates"])
        st.markdown("---")

    if view == "Laws":
        render_laws(settings, cache)
    else:
        render_updates(settings)


if __name__ == "__main__":
    main()
