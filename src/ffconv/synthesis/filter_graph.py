"""Typed FFmpeg filter graph model.

A graph is an ordered list of stages. Each stage reads one or more pads,
applies a comma-separated filter chain and writes one or more pads. Pads are
either raw input stream specifiers (``0:v``) or named stage outputs
(``v_processed``). Text is only produced by ``FilterGraph.serialize()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class PadRef:
    """Reference to a filter graph pad."""

    name: str
    is_input_stream: bool = False
    """True for raw input stream specifiers such as ``0:v``."""

    @classmethod
    def stream(cls, specifier: str) -> PadRef:
        return cls(specifier, is_input_stream=True)

    @property
    def graph_label(self) -> str:
        """Label as written inside a filter graph (always bracketed)."""
        return f"[{self.name}]"

    @property
    def map_label(self) -> str:
        """Label as written after ``-map``.

        Named stage outputs are bracketed; raw stream specifiers are not.
        """
        if self.is_input_stream:
            return self.name
        return f"[{self.name}]"


RAW_VIDEO = PadRef.stream("0:v")
RAW_AUDIO = PadRef.stream("0:a")


@dataclass(frozen=True)
class Filter:
    """A single filter invocation, e.g. ``scale=-2:720:flags=lanczos``."""

    name: str
    params: str | None = None

    def render(self) -> str:
        if self.params is None:
            return self.name
        return f"{self.name}={self.params}"


class StageKind(Enum):
    """Kind of transformation a stage performs."""

    VIDEO_CHAIN = "video_chain"
    SPLIT = "split"
    PALETTE_GENERATE = "palette_generate"
    PALETTE_APPLY = "palette_apply"
    AUDIO_CHAIN = "audio_chain"


@dataclass(frozen=True)
class FilterStage:
    """One ``;``-separated element of a filter graph."""

    kind: StageKind
    inputs: tuple[PadRef, ...]
    filters: tuple[Filter, ...]
    outputs: tuple[PadRef, ...]

    def serialize(self) -> str:
        ins = "".join(pad.graph_label for pad in self.inputs)
        chain = ",".join(f.render() for f in self.filters)
        outs = "".join(pad.graph_label for pad in self.outputs)
        return f"{ins}{chain}{outs}"


@dataclass
class FilterGraph:
    """Ordered filter graph with the current video and audio pads threaded through.

    ``video_pad`` and ``audio_pad`` always point at the pad that holds the
    latest version of each stream, starting at the raw input streams.
    """

    stages: list[FilterStage] = field(default_factory=list)
    video_pad: PadRef = RAW_VIDEO
    audio_pad: PadRef = RAW_AUDIO

    @property
    def is_empty(self) -> bool:
        return not self.stages

    @property
    def kinds(self) -> list[StageKind]:
        return [stage.kind for stage in self.stages]

    def add_video_chain(self, filters: list[Filter], output: str) -> None:
        """Append a video chain reading the current video pad.

        No-op when ``filters`` is empty, leaving the current pad unchanged.
        """
        if not filters:
            return
        out = PadRef(output)
        self.stages.append(
            FilterStage(
                kind=StageKind.VIDEO_CHAIN,
                inputs=(self.video_pad,),
                filters=tuple(filters),
                outputs=(out,),
            )
        )
        self.video_pad = out

    def add_palette_stages(self, output: str) -> None:
        """Append split -> palettegen -> paletteuse on the current video pad."""
        copy_a, copy_b, palette = PadRef("a"), PadRef("b"), PadRef("p")
        out = PadRef(output)
        self.stages.extend(
            [
                FilterStage(
                    kind=StageKind.SPLIT,
                    inputs=(self.video_pad,),
                    filters=(Filter("split"),),
                    outputs=(copy_a, copy_b),
                ),
                FilterStage(
                    kind=StageKind.PALETTE_GENERATE,
                    inputs=(copy_a,),
                    filters=(Filter("palettegen"),),
                    outputs=(palette,),
                ),
                FilterStage(
                    kind=StageKind.PALETTE_APPLY,
                    inputs=(copy_b, palette),
                    filters=(Filter("paletteuse"),),
                    outputs=(out,),
                ),
            ]
        )
        self.video_pad = out

    def add_audio_chain(self, filters: list[Filter], output: str) -> None:
        """Append an audio chain reading the current audio pad."""
        if not filters:
            return
        out = PadRef(output)
        self.stages.append(
            FilterStage(
                kind=StageKind.AUDIO_CHAIN,
                inputs=(self.audio_pad,),
                filters=tuple(filters),
                outputs=(out,),
            )
        )
        self.audio_pad = out

    def serialize(self) -> str:
        """Render the graph as a ``-filter_complex`` value."""
        return ";".join(stage.serialize() for stage in self.stages)
