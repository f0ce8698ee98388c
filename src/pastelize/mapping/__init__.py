"""Mapping of extracted color facts onto the Catppuccin palette."""

from pastelize.mapping.classifier import (
    ClassificationEntry,
    Classifier,
    StubClassifier,
    parse_classification_response,
)
from pastelize.mapping.llm import OpenAICompatibleClassifier
from pastelize.mapping.mapper import map_snapshot
from pastelize.mapping.options import MapperOptions
from pastelize.mapping.prompts import ClassificationPrompt, FactKind, build_prompt

__all__ = [
    "ClassificationEntry",
    "ClassificationPrompt",
    "Classifier",
    "FactKind",
    "MapperOptions",
    "OpenAICompatibleClassifier",
    "StubClassifier",
    "build_prompt",
    "map_snapshot",
    "parse_classification_response",
]
