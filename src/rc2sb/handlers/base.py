"""Base handler class for converting Resource Containers to burritos.

This module defines the interface every subject-specific handler
implements, plus the options and cancellation check they share.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import ConversionCancelled
from ..sb.metadata import UW_BURRITOS, build_base_metadata, build_copyright

if TYPE_CHECKING:
    from ..rc.manifest import Manifest
    from ..sb.types import Flavor, Metadata, Scope


@dataclass(frozen=True)
class HandlerOptions:
    """Options passed from the pipeline to a handler.

    Attributes:
        payload_path: Translation Words checkout used as the TWL payload
            source, overriding auto-detection of ``<lang>_tw/``
        usfm_path: Directory of USFM files to read localized book names
            from (TN, TQ and TWL only)
    """

    payload_path: Path | None = None
    usfm_path: Path | None = None


def check_cancelled(cancel_event: threading.Event | None) -> None:
    """Raise ConversionCancelled if the event has been set."""
    if cancel_event is not None and cancel_event.is_set():
        raise ConversionCancelled()


def set_current_scope(metadata: "Metadata", current_scope: "Scope") -> None:
    """Record the books present in the output. Left out when there are none."""
    if current_scope:
        metadata["type"]["flavorType"]["currentScope"] = current_scope


class Handler(ABC):
    """Abstract base class for subject handlers.

    A handler reads an RC checkout, writes the relocated files into the
    output directory and returns the metadata describing them. It never
    writes ``metadata.json`` itself; the pipeline does that once the
    record is complete.
    """

    subject: str = ""
    id_authority: str = UW_BURRITOS
    # Empty means the uppercased manifest identifier
    abbreviation: str = ""
    flavor_type: str = ""
    flavor: "Flavor" = {"name": ""}
    narrative_copyright: bool = False

    def build_metadata(self, manifest: "Manifest") -> "Metadata":
        """Create the metadata scaffolding for this handler's subject.

        Sets the shared blocks, the flavor type and the copyright. The
        caller adds ingredients, localized names and the current scope.
        """
        metadata = build_base_metadata(manifest, self.id_authority, self.abbreviation)
        metadata["type"] = {
            "flavorType": {"name": self.flavor_type, "flavor": dict(self.flavor)}  # type: ignore[typeddict-item]
        }
        metadata["copyright"] = build_copyright(manifest, narrative=self.narrative_copyright)
        return metadata

    @abstractmethod
    def convert(
        self,
        manifest: "Manifest",
        in_dir: Path,
        out_dir: Path,
        options: HandlerOptions,
        cancel_event: threading.Event | None = None,
    ) -> "Metadata":
        """Convert an RC checkout into SB ingredients.

        Args:
            manifest: Parsed manifest of the RC
            in_dir: Root of the RC checkout
            out_dir: Root of the SB output (already created)
            options: Cross-cutting conversion options
            cancel_event: Checked before starting and before each project

        Returns:
            Fully populated metadata record

        Raises:
            ConversionCancelled: If cancel_event is set
            FileOperationError: If reading or writing a file fails
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(subject={self.subject!r})"
