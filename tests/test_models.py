"""Tests for law and article record types and the bundled law list."""

from datetime import date

from laws_data import LAW_RECORDS, LAWS, load_laws
from models import Article, Law, Source


class TestLaw:

    def test_defaults(self):
        law = Law(id="ita-66", act="IT Act", section="Section 66", theory="Hacking.")
        assert law.keywords == []
        assert law.related_sections == []
        assert law.last_updated is None
        assert law.category is None

    def test_list_defaults_not_shared(self):
        first = Law(id="a", act="x", section="s", theory="t")
        first.keywords.append("hacking")
        assert Law(id="b", act="x", section="s", theory="t").keywords == []


class TestBundledLaws:

    def test_every_record_loads(self):
        assert len(LAWS) == len(LAW_RECORDS) == 10

    def test_ids_unique_and_dated(self):
        ids = [law.id for law in LAWS]
        assert len(ids) == len(set(ids))
        assert all(isinstance(law.last_updated, date) for law in LAWS)

    def test_malformed_records_skipped(self, caplog):
        records = [LAW_RECORDS[0], {"id": "broken"}, LAW_RECORDS[0]]
        with caplog.at_level("WARNING", logger="laws_data"):
            laws = load_laws(records)
        assert [law.id for law in laws] == [LAW_RECORDS[0]["id"]]
        assert len(caplog.records) == 2


class TestArticle:

    def test_defaults(self):
        article = Article(title="Breach", url="https://x")
        assert article.source == Source()
        assert article.source.name == ""
        assert article.description == ""
        assert article.content is None
        assert article.id == ""
