import httpx
import pytest

from publications_page.config import Settings
from publications_page.engine import PublicationEngine
from publications_page.pipeline import PipelineError, PublicationsPage, run_pipeline
from publications_page.presentation import NO_RESULTS_MESSAGE
from publications_page.services.loader import parse_citations, parse_publications


def make_transport(publications_csv, citations_csv, fail=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if fail and request.url.path.endswith(fail):
            return httpx.Response(500)
        if request.url.path.endswith("publications.csv"):
            return httpx.Response(200, text=publications_csv)
        return httpx.Response(200, text=citations_csv)

    return httpx.MockTransport(handler)


def build_engine(publications_csv, citations_csv):
    return PublicationEngine(parse_publications(publications_csv), parse_citations(citations_csv))


def test_engine_enriches_and_summarizes(publications_csv, citations_csv):
    engine = build_engine(publications_csv, citations_csv)

    assert [pub.citation_count for pub in engine.publications] == [2, 1, 0, 0]
    assert engine.citation_count(1) == 2
    assert engine.citation_count("missing") == 0
    assert [c.title for c in engine.index_for("1")] == ["Citing work A", "Citing work C"]
    assert engine.categories() == ["Ecology", "Fisheries"]

    summary = engine.metrics()
    assert summary.total_publications == 4
    assert summary.total_citations == 4
    assert summary.h_index == 1
    assert summary.i10_index == 0
    assert summary.first_authored_count == 0
    assert summary.distinct_category_count == 2
    assert summary.years_active == 5


def test_engine_filters_do_not_change_metrics(publications_csv, citations_csv):
    engine = build_engine(publications_csv, citations_csv)
    before = engine.metrics()

    visible = engine.set_category("Ecology")
    engine.set_search("food")

    assert [pub.id for pub in visible] == ["1", "3"]
    assert [pub.id for pub in engine.visible()] == ["1"]
    assert engine.metrics() == before


def test_run_pipeline_applies_filters(sample_settings, publications_csv, citations_csv):
    page = run_pipeline(
        sample_settings,
        category="Ecology",
        search="ADHURYA",
        transport=make_transport(publications_csv, citations_csv),
    )

    assert [section.year for section in page.sections] == ["2023", "2021"]
    assert page.sections[1].publications[0].citation_label == "2 citations"
    active = [f.label for f in page.filters if f.active]
    assert active == ["Ecology (2)"]
    assert page.message is None


def test_run_pipeline_reports_no_results(sample_settings, publications_csv, citations_csv):
    page = run_pipeline(
        sample_settings,
        search="no such paper",
        transport=make_transport(publications_csv, citations_csv),
    )
    assert page.sections == []
    assert page.message == NO_RESULTS_MESSAGE
    assert page.stats[0].value == 4


def test_run_pipeline_raises_on_failed_fetch(sample_settings, publications_csv, citations_csv):
    transport = make_transport(publications_csv, citations_csv, fail="citations.csv")

    with pytest.raises(PipelineError, match="citations.csv: Internal Server Error"):
        run_pipeline(sample_settings, transport=transport)


@pytest.mark.asyncio
async def test_failed_page_is_inert(sample_settings, publications_csv, citations_csv):
    transport = make_transport(publications_csv, citations_csv, fail="publications.csv")

    page = await PublicationsPage.load(sample_settings, transport=transport)

    assert not page.ready
    assert page.citations_for("1") == []
    view = page.set_category("Ecology")
    assert view.sections == []
    assert view.stats == []
    assert view.message.startswith("Error loading publications: Failed to load publications.csv")


@pytest.mark.asyncio
async def test_page_subscribers_get_fresh_views(sample_settings, publications_csv, citations_csv):
    page = await PublicationsPage.load(
        sample_settings, transport=make_transport(publications_csv, citations_csv)
    )
    views = []
    page.subscribe(views.append)

    page.set_category("Fisheries")
    page.set_search("nothing matches")

    assert len(views) == 2
    assert [s.year for s in views[0].sections] == ["2019"]
    assert views[1].message == NO_RESULTS_MESSAGE


@pytest.mark.asyncio
async def test_undecodable_source_reports_through_page_error(tmp_path, citations_csv):
    (tmp_path / "publications.csv").write_bytes(b"id,title\n1,\xff\xfe bad\n")
    (tmp_path / "citations.csv").write_text(citations_csv, encoding="utf-8")
    settings = Settings(
        publications_source=str(tmp_path / "publications.csv"),
        citations_source=str(tmp_path / "citations.csv"),
    )

    page = await PublicationsPage.load(settings)

    assert not page.ready
    assert page.error.startswith("Failed to load publications.csv")
    assert page.view().sections == []
