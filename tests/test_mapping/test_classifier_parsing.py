"""Tests for classifier response parsing and the stub classifier."""

import logging

import pytest

from pastelize.errors import ClassifierResponseError
from pastelize.mapping.classifier import (
    ClassificationEntry,
    Classifier,
    StubClassifier,
    parse_classification_response,
)
from pastelize.mapping.prompts import FactKind, build_prompt
from pastelize.model.snapshot import AnalysisSnapshot
from pastelize.palette.tokens import Flavor, PaletteToken

P = PaletteToken


# ---------------------------------------------------------------------------
# parse_classification_response
# ---------------------------------------------------------------------------


class TestParseResponse:
    def test_mappings_list(self):
        entries = parse_classification_response(
            {"mappings": [{"factId": "--a", "paletteToken": " Blue ", "justification": "Links"}]}
        )
        assert entries == [ClassificationEntry("--a", P.BLUE, "Links")]

    def test_alternate_keys(self):
        entries = parse_classification_response(
            [{"variable": "--a", "catppuccinColor": "red", "reason": "Errors"}]
        )
        assert entries == [ClassificationEntry("--a", P.RED, "Errors")]

    def test_id_to_token_object(self):
        entries = parse_classification_response({"mappings": {"--a": "base", "--b": {"token": "text"}}})
        assert [(e.fact_id, e.token) for e in entries] == [("--a", P.BASE), ("--b", P.TEXT)]

    def test_bare_object_without_mappings_key(self):
        entries = parse_classification_response({".x|color": "overlay0"})
        assert entries[0].fact_id == ".x|color"

    def test_important_flag(self):
        entries = parse_classification_response(
            [
                {"id": "a", "token": "blue", "important": True},
                {"id": "b", "token": "blue", "important": "yes"},
            ]
        )
        assert entries[0].important is True
        assert entries[1].important is None

    def test_unknown_tokens_are_dropped(self, caplog):
        with caplog.at_level(logging.WARNING):
            entries = parse_classification_response(
                [{"id": "a", "token": "chartreuse"}, {"id": "b", "token": "green"}]
            )
        assert [e.fact_id for e in entries] == ["b"]
        assert "chartreuse" in caplog.text

    def test_entries_without_id_are_dropped(self):
        assert parse_classification_response([{"token": "blue"}, "blue", 7]) == []

    @pytest.mark.parametrize("body", ["not json", 42, None])
    def test_unexpected_body(self, body):
        with pytest.raises(ClassifierResponseError):
            parse_classification_response(body)


# ---------------------------------------------------------------------------
# StubClassifier
# ---------------------------------------------------------------------------


class TestStubClassifier:
    def _prompt(self, kind=FactKind.VARIABLES):
        return build_prompt(kind, AnalysisSnapshot(url="https://x.test/"), [], Flavor.MOCHA, P.MAUVE)

    def test_satisfies_protocol(self):
        assert isinstance(StubClassifier(), Classifier)

    def test_returns_canned_response_per_kind(self):
        stub = StubClassifier({FactKind.SVGS: {"mappings": {"#FFFFFF": "text"}}})
        assert stub.classify(self._prompt(FactKind.VARIABLES)) == []
        assert stub.classify(self._prompt(FactKind.SVGS))[0].token is P.TEXT
        assert [p.kind for p in stub.prompts] == [FactKind.VARIABLES, FactKind.SVGS]

    def test_raises_configured_error(self):
        stub = StubClassifier(error=RuntimeError("boom"))
        with pytest.raises(RuntimeError, match="boom"):
            stub.classify(self._prompt())
        assert len(stub.prompts) == 1
