"""End-to-end pipeline: analyze a page, map its colors, render and validate a theme."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from pastelize.analysis.aggregate import AnalysisOptions, analyze_page
from pastelize.generator import GeneratorConfig, get_generator
from pastelize.mapping.classifier import Classifier
from pastelize.mapping.mapper import map_snapshot
from pastelize.mapping.options import MapperOptions
from pastelize.model.diagnostic import Diagnostic
from pastelize.model.mapping import MappingResult
from pastelize.model.page import PageSource
from pastelize.model.snapshot import AnalysisSnapshot
from pastelize.model.theme import GeneratedTheme
from pastelize.palette.tokens import Flavor, PaletteToken
from pastelize.validation.validator import (
    ValidationError,
    ValidationReport,
    validate_mappings,
    validate_output,
)

logger = logging.getLogger(__name__)


class PipelineError(ValidationError):
    """A pipeline run produced ERROR diagnostics and the caller asked for strictness."""

    def __init__(self, diagnostics: list[Diagnostic], result: PipelineResult | None = None) -> None:
        super().__init__(diagnostics)
        self.result = result


@dataclass(frozen=True)
class PipelineRequest:
    url: str
    html: str = ""
    css: str = ""
    flavor: Flavor = Flavor.MOCHA
    main_accent: PaletteToken = PaletteToken.MAUVE
    mapper_options: MapperOptions = field(default_factory=MapperOptions)
    generator_variant: str = "dynamic"
    branding_colors: tuple[str, ...] = ()
    analysis_options: AnalysisOptions = field(default_factory=AnalysisOptions)
    include_comments: bool = True
    light_flavor: Flavor = Flavor.LATTE

    @classmethod
    def from_page(cls, page: PageSource, **kwargs) -> PipelineRequest:
        return cls(
            url=page.url,
            html=page.html,
            css=page.css,
            branding_colors=page.branding_colors,
            **kwargs,
        )

    def page(self) -> PageSource:
        return PageSource(
            url=self.url,
            html=self.html,
            css=self.css,
            branding_colors=tuple(self.branding_colors),
        )


@dataclass(frozen=True)
class PipelineResult:
    analysis: AnalysisSnapshot
    mappings: MappingResult
    theme: GeneratedTheme
    mapping_report: ValidationReport
    output_report: ValidationReport

    @property
    def errors(self) -> list[Diagnostic]:
        return self.mapping_report.errors + self.output_report.errors

    @property
    def warnings(self) -> list[Diagnostic]:
        return self.mapping_report.warnings + self.output_report.warnings

    @property
    def is_valid(self) -> bool:
        return self.mapping_report.is_valid and self.output_report.is_valid


def run_pipeline(
    request: PipelineRequest,
    *,
    classifier: Classifier | None = None,
    strict: bool = False,
) -> PipelineResult:
    """Run analysis, mapping, generation and validation for one page.

    Validation errors are returned on the result; with *strict* they raise
    :class:`PipelineError` instead. Raises :class:`UnknownVariantError` for
    an unregistered generator variant.
    """
    generator = get_generator(request.generator_variant)
    config = GeneratorConfig(
        url=request.url,
        flavor=request.flavor,
        light_flavor=request.light_flavor,
        accent=request.main_accent,
        include_comments=request.include_comments,
        variant=request.generator_variant,
    )

    analysis = analyze_page(request.page(), request.analysis_options)
    mappings = map_snapshot(
        analysis,
        flavor=request.flavor,
        main_accent=request.main_accent,
        options=request.mapper_options,
        classifier=classifier,
    )
    mapping_report = validate_mappings(mappings)
    theme = generator.generate(analysis, mappings, config)
    output_report = validate_output(theme)

    result = PipelineResult(
        analysis=analysis,
        mappings=mappings,
        theme=theme,
        mapping_report=mapping_report,
        output_report=output_report,
    )
    if result.errors:
        logger.error("Theme for %s has %d validation error(s)", request.url, len(result.errors))
        if strict:
            raise PipelineError(result.errors, result)
    elif result.warnings:
        logger.info("Theme for %s has %d warning(s)", request.url, len(result.warnings))
    return result


@dataclass(frozen=True)
class BatchItem:
    """Outcome of one request in :func:`run_batch`."""

    request: PipelineRequest
    result: PipelineResult | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_batch(
    requests: Sequence[PipelineRequest],
    *,
    classifier: Classifier | None = None,
    strict: bool = False,
    max_workers: int | None = None,
) -> list[BatchItem]:
    """Run independent pipelines concurrently, returning items in input order.

    A failing run is captured on its item and never cancels the others.
    """

    def run_one(request: PipelineRequest) -> BatchItem:
        try:
            return BatchItem(request, result=run_pipeline(request, classifier=classifier, strict=strict))
        except Exception as exc:
            logger.warning("Pipeline for %s failed: %s", request.url, exc)
            return BatchItem(request, error=exc)

    if len(requests) <= 1:
        return [run_one(r) for r in requests]

    results: dict[int, BatchItem] = {}
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(run_one, r): i for i, r in enumerate(requests)}
        for future in as_completed(futures):
            results[futures[future]] = future.result()

    # Preserve original order
    return [results[i] for i in range(len(requests))]
