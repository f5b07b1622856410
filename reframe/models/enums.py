from enum import Enum

class FitMode(Enum):
    COVER = "cover"                      # fill then crop center
    CONTAIN = "contain"                  # keep aspect ratio, pad with background
    BLURRED_CONTAIN = "blurred-contain"  # contain over a blurred cover of itself

class ExportFormat(Enum):
    PNG = "PNG"
    TIFF = "TIFF"

    @property
    def extension(self) -> str:
        return self.value.lower()
