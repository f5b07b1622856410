from pathlib import Path
from PIL import Image
from reframe.controllers.batch_controller import BatchController
from reframe.models.settings import ExportSettings
from reframe.models.enums import FitMode
from reframe.utils.logging_utils import build_logger

root = Path('/tmp/reframe_example')
raw = root / '2026-01-01' / '_raw'
raw.mkdir(parents=True, exist_ok=True)
Image.new('RGB', (1024, 1024), (200, 80, 40)).save(raw / 'sample_master.png')

settings = ExportSettings(root=root, fit_mode=FitMode.BLURRED_CONTAIN)

written = BatchController(settings, build_logger()).run()
for p in written:
    print('Saved:', p, Image.open(p).size)
