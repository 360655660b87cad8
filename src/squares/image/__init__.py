from .bmp import BmpQRImage
from .png import PngQRImage
from .raster import RasterImage, to_data_url, to_raster
from .svg import SvgQRImage
