import pytest

from publications_page.config import Settings

PUBLICATIONS_CSV = """id,title,authors,journal,year,category,type,volume,pages,link,doi,keywords
1,"Food webs, revisited","Adhurya, S., Lee, K.",Ecological Modelling,2021,Ecology,Article,440,109-120,https://doi.org/10.1016/j.eco.2021,10.1016/j.eco.2021,"network, trophic"
2,Fish stock assessment,"Smith, J., Adhurya, S.",Fisheries Research,2019,Fisheries,Article,12,1-10,NA,NA,
3,"The ""quoted"" study","Adhurya, S, Kim, H.",Marine Policy,2023,Ecology,Review,,,Available from ResearchGate,,mangrove
,Row without an id,"Nobody, N.",Nowhere,2020,Ecology,Article,,,,,
4,Paper in press,"Doe, A.",Some Journal,in press,,,,,,,

"""

CITATIONS_CSV = """id,title,author,year,journal_book,link,doi
1,Citing work A,"Roe, B.",2022,Ecology Letters,https://doi.org/10.1/a,10.1/a
2,Citing work B,"Poe, C.",2020,Fish and Fisheries,,NA
1,Citing work C,"Moe, D.",2023,Oikos,https://example.org/c,NA
9,Orphan citation,"Zoe, E.",2024,Nowhere,,
"""


@pytest.fixture
def sample_settings() -> Settings:
    return Settings(
        publications_source="https://example.org/assets/publications.csv",
        citations_source="https://example.org/assets/citations.csv",
        http_timeout=5.0,
    )


@pytest.fixture
def publications_csv() -> str:
    return PUBLICATIONS_CSV


@pytest.fixture
def citations_csv() -> str:
    return CITATIONS_CSV
