"""Conversion pipeline from Resource Container to Scripture Burrito.

This module provides the main interface for converting an RC checkout.
The pipeline is subject-agnostic: it loads the manifest, dispatches to
the handler registered for the manifest's subject, validates the
returned metadata and writes ``metadata.json``.
"""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

from jsonschema import ValidationError

from .errors import ConversionCancelled, ConversionError, FileOperationError, MetadataValidationError
from .handlers.base import HandlerOptions, check_cancelled
from .rc.manifest import load_manifest
from .registry import HandlerRegistry
from .sb.metadata import write_metadata
from .sb.types import Metadata
from .sb.validator import error_location, validate_metadata

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionOptions:
    """Options for a conversion.

    Attributes:
        payload_path: Translation Words checkout to bundle with a TWL
            conversion. When unset, ``<lang>_tw/`` inside the input is
            used if present.
        usfm_path: Directory of USFM files providing localized book
            names for TN, TQ and TWL conversions
        validate: Validate the metadata against the SB schema before
            writing it
    """

    payload_path: Path | None = None
    usfm_path: Path | None = None
    validate: bool = True

    def handler_options(self) -> HandlerOptions:
        return HandlerOptions(payload_path=self.payload_path, usfm_path=self.usfm_path)


@dataclass(frozen=True)
class ConversionResult:
    """Summary of a completed conversion.

    Attributes:
        subject: RC subject that was converted
        identifier: RC identifier (e.g. 'obs', 'ult', 'tn')
        in_dir: Input RC directory
        out_dir: Output SB directory
        ingredients: Number of ingredients in the SB metadata
        metadata: The metadata written to ``metadata.json``
    """

    subject: str
    identifier: str
    in_dir: Path
    out_dir: Path
    ingredients: int
    metadata: Metadata


class ConversionPipeline:
    """Main interface for RC to SB conversion.

    Example:
        >>> pipeline = ConversionPipeline()
        >>> result = pipeline.convert(Path("en_tn"), Path("en_tn_sb"))
        >>> print(result.ingredients)
    """

    def __init__(self, registry: HandlerRegistry | None = None):
        """Initialize the pipeline.

        Args:
            registry: Handlers to dispatch to. Defaults to
                HandlerRegistry.default().
        """
        self.registry = registry if registry is not None else HandlerRegistry.default()

    def convert(
        self,
        in_dir: Path,
        out_dir: Path,
        options: ConversionOptions | None = None,
        cancel_event: threading.Event | None = None,
    ) -> ConversionResult:
        """Convert the RC in ``in_dir`` into an SB in ``out_dir``.

        ``metadata.json`` is written last, and only if everything else
        succeeded. Files already copied are left in place on failure.

        Args:
            in_dir: RC checkout containing manifest.yaml
            out_dir: Output directory, created if needed
            options: Conversion options
            cancel_event: Set it to stop the conversion

        Returns:
            ConversionResult describing the written SB

        Raises:
            ManifestError: If manifest.yaml is missing or malformed
            UnsupportedSubjectError: If no handler supports the subject
            ConversionCancelled: If cancel_event is set
            MetadataValidationError: If the metadata fails schema validation
            ConversionError: If the handler fails
        """
        options = options or ConversionOptions()
        in_dir = Path(in_dir)
        out_dir = Path(out_dir)

        check_cancelled(cancel_event)

        manifest = load_manifest(in_dir)
        logger.info("Loaded manifest: subject=%r identifier=%r", manifest.subject, manifest.identifier)

        handler = self.registry.lookup(manifest.subject)
        logger.info("Converting with %r", handler)

        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileOperationError("creating", out_dir, e.strerror or e) from e

        try:
            metadata = handler.convert(manifest, in_dir, out_dir, options.handler_options(), cancel_event)
        except ConversionCancelled:
            raise
        except (ConversionError, OSError) as e:
            raise ConversionError(f"converting {manifest.subject}: {e}") from e

        if options.validate:
            self._validate(metadata)

        check_cancelled(cancel_event)
        path = write_metadata(metadata, out_dir)
        logger.info("Wrote %s with %d ingredients", path, len(metadata["ingredients"]))

        return ConversionResult(
            subject=manifest.subject,
            identifier=manifest.identifier,
            in_dir=in_dir,
            out_dir=out_dir,
            ingredients=len(metadata["ingredients"]),
            metadata=metadata,
        )

    @staticmethod
    def _validate(metadata: Metadata) -> None:
        try:
            validate_metadata(metadata)
        except ValidationError as e:
            error_path = error_location(e)
            raise MetadataValidationError(
                f"metadata validation error at {error_path}: {e.message}", error_path
            ) from e


def convert(
    in_dir: Path,
    out_dir: Path,
    options: ConversionOptions | None = None,
    cancel_event: threading.Event | None = None,
) -> ConversionResult:
    """Convert an RC to an SB using every built-in handler.

    Shortcut for ``ConversionPipeline().convert(...)``.
    """
    return ConversionPipeline().convert(in_dir, out_dir, options, cancel_event)
