# Path: compare_studio/config/settings.py
# Purpose: Provide typed application configuration models.
# Layer: config.
# Details: Centralizes settings for clustering, footer detection, compositing, embedders, export, and logging.

import os
from pathlib import Path
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

FooterBackground = Literal["white", "black"]
FooterMode = Literal["always", "when_missing"]


class ClusteringSettings(BaseModel):
    """Settings controlling how embeddings are grouped into scenes."""

    threshold: float = Field(default=0.92, description="Cosine similarity a pair must strictly exceed to share a scene.")


class DetectorSettings(BaseModel):
    """Thresholds used by the native footer detector."""

    presence_band_ratio: float = Field(default=0.15, description="Fraction of image height scanned by the presence check.")
    measure_band_ratio: float = Field(default=0.20, description="Maximum fraction of image height walked by the height measurement.")
    sample_max_width: int = Field(default=400, description="Maximum width of the downsampled sampling canvas.")
    sample_max_height: int = Field(default=120, description="Maximum height of the downsampled sampling canvas.")
    pure_white: int = Field(default=250, description="Every channel above this value counts as pure white.")
    pure_black: int = Field(default=10, description="Every channel below this value counts as pure black.")
    uniform_row_ratio: float = Field(default=0.90, description="Share of solid pixels that makes a row a caption row.")
    row_mean_white: float = Field(default=230.0, description="Per-channel row mean that counts as a white footer row.")
    tall_aspect_ratio: float = Field(default=1.45, description="Height/width ratio above which the aspect fallback reports a footer.")


class CompositorSettings(BaseModel):
    """Geometry and styling of the side-by-side comparison canvas."""

    canvas_width: int = Field(default=3840, description="Output width in pixels.")
    canvas_height: int = Field(default=2160, description="Output height in pixels.")
    slot_width: int = Field(default=1915, description="Width of each image slot.")
    gutter_width: int = Field(default=10, description="Width of the dark separator between slots.")
    footer_ratio: float = Field(default=0.12, description="Fraction of slot height reserved for the synthesized footer.")
    padding_ratio: float = Field(default=0.03, description="Horizontal text padding as a fraction of slot width.")
    divider_ratio: float = Field(default=0.55, description="Horizontal position of the footer divider within the slot.")
    max_font_px: int = Field(default=72, description="Upper bound for the footer title font size.")
    background_color: str = Field(default="#000000", description="Canvas fill behind both slots.")
    gutter_color: str = Field(default="#0a0a0a", description="Fill of the gutter between slots.")
    placeholder_color: str = Field(default="#333333", description="Fill used for a slot whose image failed to decode.")
    footer_bg: FooterBackground = Field(default="black", description="Default footer background.")
    crop_native_footer: bool = Field(default=True, description="Crop measured native caption bands before layout.")
    footer_mode: FooterMode = Field(default="always", description="Draw the synthesized footer always or only when no native one exists.")
    font_path: str = Field(default="DejaVuSans.ttf", description="Regular TrueType font used for footer text.")
    bold_font_path: str = Field(default="DejaVuSans-Bold.ttf", description="Bold TrueType font used for the model name.")


class EmbedderSettings(BaseModel):
    """Settings describing which embedder implementation to use and how to load it."""

    name: str = Field(default="thumbnail", description="Identifier of the embedder implementation.")
    model_name: str = Field(default="openai/clip-vit-base-patch32", description="Model variant used by the CLIP embedder.")
    device: str = Field(default="cpu", description="Target device for model execution.")
    dim: int = Field(default=192, description="Embedding dimensionality for the thumbnail embedder.")


class ExportSettings(BaseModel):
    """Settings for writing composited images to disk."""

    output_dir: Path = Field(default=Path("exports"), description="Directory receiving exported comparisons.")
    quality: int = Field(default=95, description="JPEG quality of the exported comparison.")
    image_format: str = Field(default="JPEG", description="Pillow format name used on export.")


class AppSettings(BaseModel):
    """Top-level application settings shared across services."""

    accepted_extensions: List[str] = Field(
        default_factory=lambda: [".jpg", ".jpeg", ".heic", ".png"],
        description="File extensions accepted when adding images to a session.",
    )
    log_history: int = Field(default=100, description="Number of activity log entries kept by a session.")
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")
    clustering: ClusteringSettings = Field(default_factory=ClusteringSettings)
    detector: DetectorSettings = Field(default_factory=DetectorSettings)
    compositor: CompositorSettings = Field(default_factory=CompositorSettings)
    embedder: EmbedderSettings = Field(default_factory=EmbedderSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Instantiate settings, applying ``COMPARE_STUDIO_*`` environment overrides when present.

        Overrides go through validation, so an invalid value raises ``ValidationError``.
        """

        env = os.environ
        raw: Dict[str, Any] = {}
        if "COMPARE_STUDIO_LOG_LEVEL" in env:
            raw["log_level"] = env["COMPARE_STUDIO_LOG_LEVEL"]
        if "COMPARE_STUDIO_THRESHOLD" in env:
            raw["clustering"] = {"threshold": env["COMPARE_STUDIO_THRESHOLD"]}
        if "COMPARE_STUDIO_EMBEDDER" in env:
            raw["embedder"] = {"name": env["COMPARE_STUDIO_EMBEDDER"]}
        if "COMPARE_STUDIO_FOOTER_BG" in env:
            raw["compositor"] = {"footer_bg": env["COMPARE_STUDIO_FOOTER_BG"]}
        if "COMPARE_STUDIO_EXPORT_DIR" in env:
            raw["export"] = {"output_dir": env["COMPARE_STUDIO_EXPORT_DIR"]}
        return cls.model_validate(raw)


__all__ = [
    "AppSettings",
    "ClusteringSettings",
    "CompositorSettings",
    "DetectorSettings",
    "EmbedderSettings",
    "ExportSettings",
    "FooterBackground",
    "FooterMode",
]
