from __future__ import annotations
import io
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from PIL import Image

from reframe.imaging.pipeline import FrameComposer
from reframe.imaging.presets import PRESETS, Preset
from reframe.models.errors import NoBatchesError
from reframe.models.settings import ExportSettings
from reframe.utils.logging_utils import log_section

RAW_DIR_NAME = "_raw"
MASTER_SUFFIX = "_master"
MASTER_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp")


def base_identifier(master: Path) -> str:
    return master.stem[: -len(MASTER_SUFFIX)]


def default_output_namer(batch_dir: Path, identifier: str, preset: Preset, settings: ExportSettings) -> Path:
    ext = settings.export_format.extension
    return batch_dir / preset.key / f"{identifier}_{preset.key}.{ext}"


class BatchController:
    def __init__(self, settings: ExportSettings, logger: Optional[logging.Logger] = None,
                 presets: Sequence[Preset] = PRESETS):
        self.settings = settings
        self.logger = logger or logging.getLogger("reframe")
        self.presets = tuple(presets)
        self.composer = FrameComposer(settings)

    def latest_batch(self) -> Path:
        root = self.settings.root
        names = sorted(p.name for p in root.iterdir() if p.is_dir()) if root.is_dir() else []
        if not names:
            raise NoBatchesError(f"No batches found in {root}")
        return root / names[-1]

    def masters(self, batch_dir: Path) -> List[Path]:
        raw_dir = batch_dir / RAW_DIR_NAME
        if not raw_dir.is_dir():
            raise FileNotFoundError(f"Raw input directory not found: {raw_dir}")
        return sorted(
            p for p in raw_dir.iterdir()
            if p.is_file()
            and p.suffix.lower() in MASTER_EXTENSIONS
            and p.stem.endswith(MASTER_SUFFIX)
            and len(p.stem) > len(MASTER_SUFFIX)
        )

    def export_master(self, master: Path, batch_dir: Path) -> List[Path]:
        identifier = base_identifier(master)
        data = master.read_bytes()
        with Image.open(io.BytesIO(data)) as im:
            im.load()
            written = []
            for preset in self.presets:
                frame = self.composer.compose(im, preset)
                out_path = default_output_namer(batch_dir, identifier, preset, self.settings)
                out_path.parent.mkdir(parents=True, exist_ok=True)
                out_path.write_bytes(frame)
                self.logger.info("Reframed -> %s", out_path)
                written.append(out_path)
        return written

    def run(self, batch: Optional[str] = None) -> List[Path]:
        """
        Export every master in one batch: the newest under the root, or the
        named one. Any failure aborts the run; nothing already written is removed.
        """
        batch_dir = self.settings.root / batch if batch else self.latest_batch()
        if not batch_dir.is_dir():
            raise NoBatchesError(f"Batch not found: {batch_dir}")

        written: List[Path] = []
        with log_section(f"BATCH {batch_dir.name} ({self.settings.fit_mode.value})", self.logger):
            files = self.masters(batch_dir)
            self.logger.info("Found %d master image(s) in %s", len(files), batch_dir / RAW_DIR_NAME)
            for f in files:
                written.extend(self.export_master(f, batch_dir))
        self.logger.info("Wrote %d file(s)", len(written))
        return written
