from publications_page.models import CitationRecord, PublicationRecord
from publications_page.services.citation_index import CitationIndex
from publications_page.services.metrics import (
    category_counts,
    citation_count_of,
    distinct_categories,
    first_authored_count,
    h_index,
    i10_index,
    summarize,
    years_active,
)


def with_counts(counts):
    return [
        PublicationRecord(id=str(i), citation_count=count) for i, count in enumerate(counts, start=1)
    ]


def test_h_index_examples():
    assert h_index(with_counts([10, 8, 5, 4, 3])) == 4
    assert h_index(with_counts([3, 4, 10, 5, 8])) == 4
    assert h_index(with_counts([0, 0, 0])) == 0
    assert h_index([]) == 0
    assert h_index(with_counts([1])) == 1
    assert h_index(with_counts([100, 100])) == 2


def test_i10_index_example():
    assert i10_index(with_counts([10, 9, 15, 3])) == 2


def test_citation_count_and_index_join_on_string_ids():
    citations = [
        CitationRecord(id="5", title="a"),
        CitationRecord(id="6", title="b"),
        CitationRecord(id="5", title="c"),
        CitationRecord(id=5, title="d"),
    ]
    publication = PublicationRecord(id="5")
    index = CitationIndex(citations)

    assert citation_count_of(publication, citations) == 3
    assert [c.title for c in index.index_for("5")] == ["a", "c", "d"]
    assert [c.title for c in index.index_for(5)] == ["a", "c", "d"]
    assert index.count_for("6") == 1
    assert index.index_for("7") == []


def test_citation_index_orphans():
    index = CitationIndex([CitationRecord(id="1"), CitationRecord(id="9")])
    assert [c.id for c in index.orphans(["1", "2"])] == ["9"]
    assert len(index) == 2


def test_first_authored_count_uses_configured_spellings():
    publications = [
        PublicationRecord(id="1", authors="Adhurya S., Lee K."),
        PublicationRecord(id="2", authors="Adhurya S, Kim H."),
        PublicationRecord(id="3", authors="Smith J., Adhurya S."),
        PublicationRecord(id="4"),
    ]
    assert first_authored_count(publications, {"Adhurya S.", "Adhurya S"}) == 2
    assert first_authored_count(publications, {"Smith J."}) == 1


def test_first_authored_count_compares_first_token_only():
    # "Family, I." lists split the name at its own comma.
    publications = [
        PublicationRecord(id="1", authors="Adhurya, S., Lee, K."),
        PublicationRecord(id="2", authors="Adhurya, S, Kim, H."),
    ]
    assert first_authored_count(publications) == 0
    assert first_authored_count(publications, {"Adhurya"}) == 2


def test_categories_and_years():
    publications = [
        PublicationRecord(id="1", category="Ecology", year="2019"),
        PublicationRecord(id="2", category="", year="unknown"),
        PublicationRecord(id="3", category="Fisheries", year=2023),
        PublicationRecord(id="4", category="Ecology"),
    ]
    assert distinct_categories(publications) == {"Ecology", "Fisheries"}
    assert category_counts(publications) == {"Ecology": 2, "Fisheries": 1}
    assert list(category_counts(publications)) == ["Ecology", "Fisheries"]
    assert years_active(publications) == 5
    assert years_active([PublicationRecord(id="1")]) == 0


def test_summarize_counts_all_citation_rows():
    publications = [
        PublicationRecord(id="1", citation_count=12, category="A", year=2020, authors="Adhurya, S."),
        PublicationRecord(id="2", citation_count=1, category="B", year=2022),
    ]
    citations = [CitationRecord(id="1")] * 12 + [CitationRecord(id="2"), CitationRecord(id="99")]

    summary = summarize(publications, citations)

    assert summary.total_publications == 2
    assert summary.total_citations == 14
    assert summary.h_index == 1
    assert summary.i10_index == 1
    assert summary.first_authored_count == 0
    assert summary.distinct_category_count == 2
    assert summary.years_active == 3
