"""
Unit tests for search body construction.
"""

import pytest

from logzio_export.application.dto import SearchRequest
from logzio_export.application.query_builder import build_query, parse_raw_query
from logzio_export.domain.errors import ConfigError


@pytest.mark.unit
class TestSimpleSearch:
    """Test the --search mode."""

    def test_term_and_time_range(self):
        query = build_query(SearchRequest(search="level:ERROR", start="now-1h", end="now"))

        must = query.body["query"]["bool"]["must"]
        assert must[0] == {"query_string": {"query": "level:ERROR"}}
        assert must[1] == {"range": {"@timestamp": {"gte": "now-1h", "lte": "now"}}}
        assert query.body["sort"] == [{"@timestamp": {"order": "asc"}}]
        assert query.body["size"] == 1000
        assert "_source" not in query.body

    def test_extract_fields_limit_source(self):
        query = build_query(SearchRequest(search="x", extract=["message", "", "host"]))

        assert query.body["_source"] == {"includes": ["message", "host"]}


@pytest.mark.unit
class TestRawQuery:
    """Test the stdin query mode."""

    def test_raw_query_used_verbatim(self):
        query = build_query(SearchRequest(raw_query='{"match": {"app": "api"}}', size=250))

        assert query.body["query"] == {"match": {"app": "api"}}
        assert query.body["size"] == 250

    @pytest.mark.parametrize("raw", ["", "not json", "{\"a\": "])
    def test_unparseable_input_is_config_error(self, raw):
        with pytest.raises(ConfigError, match="Can't parse JSON query"):
            parse_raw_query(raw)

    def test_non_object_rejected(self):
        with pytest.raises(ConfigError, match="must be an object"):
            parse_raw_query("[1, 2]")

    def test_query_is_immutable(self):
        query = build_query(SearchRequest(search="x"))

        with pytest.raises(AttributeError):
            query.body = {}
