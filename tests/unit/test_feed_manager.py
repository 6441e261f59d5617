"""
Unit tests for the FeedManager lifecycle.
"""

import pytest

from feed_mapper import FeedManager, FeedState, NoDataError, ParseError, SerializeError
from feed_mapper.core.models import CombineRule, EmptyRule, RenameRule, StaticRule
from feed_mapper.export import FileExportSink


class TestFeedManagerLoad:
    """Tests for FeedManager.load"""

    def test_starts_empty(self, feed_manager):
        """Test a new manager has no feed"""
        assert feed_manager.state is FeedState.EMPTY
        assert feed_manager.records == []
        assert feed_manager.schema == []
        assert feed_manager.field_names == []

    def test_load_returns_schema_and_field_names(self, feed_manager, sample_feed_xml):
        """Test load summary"""
        result = feed_manager.load(sample_feed_xml)

        assert feed_manager.state is FeedState.LOADED
        assert result.item_count == 2
        assert result.field_names == ["g:id", "title", "brand", "model", "price", "description"]
        assert result.feed_schema[0].required is True
        assert result.feed_schema[0].help_text == "Unique product identifier"

    def test_load_replaces_previous_feed(self, loaded_manager):
        """Test a new load discards records and transformations"""
        loaded_manager.apply([StaticRule(target="brand", value="Other")])

        loaded_manager.load("<rss><item><sku>Z9</sku></item></rss>")

        assert loaded_manager.state is FeedState.LOADED
        assert [r.to_dict() for r in loaded_manager.records] == [{"sku": "Z9"}]
        assert loaded_manager.field_names == ["sku"]

    def test_failed_load_keeps_previous_state(self, loaded_manager):
        """Test ParseError leaves the loaded feed untouched"""
        loaded_manager.apply([EmptyRule(target="title")])
        before = loaded_manager.get_data()

        with pytest.raises(ParseError):
            loaded_manager.load("<rss></rss>")

        assert loaded_manager.state is FeedState.TRANSFORMED
        assert loaded_manager.get_data() == before

    def test_failed_first_load_stays_empty(self, feed_manager):
        """Test ParseError on an empty manager keeps it empty"""
        with pytest.raises(ParseError):
            feed_manager.load("<not-xml")

        assert feed_manager.state is FeedState.EMPTY


class TestFeedManagerApply:
    """Tests for FeedManager.apply"""

    def test_apply_requires_feed(self, feed_manager):
        """Test apply on an empty manager raises NoDataError"""
        with pytest.raises(NoDataError) as exc_info:
            feed_manager.apply([StaticRule(target="brand", value="Acme")])
        assert exc_info.value.operation == "apply mappings"

    def test_apply_empty_rules_is_noop(self, loaded_manager):
        """Test no rules returns current data without a state change"""
        before = loaded_manager.get_data()

        data = loaded_manager.apply([])

        assert data == before
        assert loaded_manager.state is FeedState.LOADED

    def test_apply_transforms_and_returns_preview(self, loaded_manager):
        """Test rules update every record"""
        data = loaded_manager.apply([
            RenameRule(target="name", source_field="title"),
            StaticRule(target="brand", value="Acme Outlet"),
            CombineRule(target="full", fields=["brand", "model"], separator="-"),
            EmptyRule(target="description"),
        ])

        assert loaded_manager.state is FeedState.TRANSFORMED
        first, second = data.items
        assert first["name"] == "Shirt"
        assert first["brand"] == "Acme Outlet"
        assert first["full"] == "Acme-X1"
        assert first["description"] == ""
        assert second["full"] == "Acme"
        assert data.feed_schema == loaded_manager.schema

    def test_apply_accepts_dicts(self, loaded_manager):
        """Test rule declarations as plain dicts"""
        data = loaded_manager.apply([{"type": "static", "target": "g:brand", "value": "Acme"}])
        assert data.items[0]["g:brand"] == "Acme"

    def test_reapply_is_idempotent(self, loaded_manager):
        """Test applying the same rules twice gives the same preview"""
        rules = [CombineRule(target="title", fields=["title", "brand"], separator=" / ")]

        first = loaded_manager.apply(rules)
        second = loaded_manager.apply(rules)

        assert first == second
        assert second.items[0]["title"] == "Shirt / Acme"


class TestFeedManagerSerialize:
    """Tests for FeedManager.serialize and export"""

    def test_serialize_requires_feed(self, feed_manager):
        """Test serialize on an empty manager raises NoDataError"""
        with pytest.raises(NoDataError):
            feed_manager.serialize()

    def test_serialize_loaded_feed(self, loaded_manager):
        """Test untransformed feeds serialize their values"""
        xml = loaded_manager.serialize()

        assert "<g:id>A1</g:id>" in xml
        assert "<description>Soft cotton &amp; linen</description>" in xml

    def test_export_requires_feed(self, feed_manager):
        """Test export on an empty manager raises NoDataError"""
        with pytest.raises(NoDataError):
            feed_manager.export()

    def test_export_hands_artifact_to_sink(self, loaded_manager, exported):
        """Test the sink receives bytes and the default file name"""
        result = loaded_manager.export()

        assert result == "transformed.xml"
        artifact = exported[0]
        assert artifact.file_name == "transformed.xml"
        assert artifact.content == loaded_manager.serialize().encode("utf-8")
        assert artifact.media_type == "text/xml"

    @pytest.mark.parametrize("file_name", ["", "../feed.xml", "out/feed.xml"])
    def test_export_rejects_unsafe_names(self, loaded_manager, file_name):
        """Test unsafe file names raise ValueError"""
        with pytest.raises(ValueError):
            loaded_manager.export(file_name)

    def test_export_without_sink(self, sample_feed_xml):
        """Test export needs a sink"""
        manager = FeedManager()
        manager.load(sample_feed_xml)

        with pytest.raises(ValueError) as exc_info:
            manager.export()
        assert "sink" in str(exc_info.value)

    def test_export_to_file(self, sample_feed_xml, tmp_path):
        """Test FileExportSink writes the serialized feed"""
        manager = FeedManager(export_sink=FileExportSink(tmp_path / "exports"))
        manager.load(sample_feed_xml)

        path = manager.export("shop.xml")

        assert path == tmp_path / "exports" / "shop.xml"
        assert path.read_text(encoding="utf-8") == manager.serialize()

    def test_round_trip_after_mapping(self, loaded_manager):
        """Test a transformed feed reloads with every mapped target"""
        loaded_manager.apply([
            StaticRule(target="g:brand", value="Acme & Co"),
            CombineRule(target="label", fields=["title", {"value": "été", "custom": True}], separator=" "),
        ])
        expected = loaded_manager.get_data().items

        reloaded = FeedManager()
        reloaded.load(loaded_manager.serialize())

        assert [r.original for r in reloaded.records] == [
            {k: v for k, v in item.items() if v} for item in expected
        ]

    @pytest.mark.parametrize("target", ["price\n", "\u00bd"])
    def test_apply_rejects_unwritable_target(self, loaded_manager, target):
        """Test targets that cannot become tags fail before any record changes"""
        before = loaded_manager.get_data()

        with pytest.raises(ValueError):
            loaded_manager.apply([{"type": "static", "target": target, "value": "x"}])

        assert loaded_manager.get_data() == before
        assert loaded_manager.state is FeedState.LOADED

    def test_serialize_rejects_forbidden_characters(self, loaded_manager):
        """Test control characters in mapped values raise SerializeError"""
        loaded_manager.apply([StaticRule(target="note", value="bell\x07here")])

        with pytest.raises(SerializeError) as exc_info:
            loaded_manager.serialize()

        assert exc_info.value.field_name == "note"

    def test_reset(self, loaded_manager):
        """Test reset returns to EMPTY"""
        loaded_manager.reset()

        assert loaded_manager.state is FeedState.EMPTY
        with pytest.raises(NoDataError):
            loaded_manager.serialize()
