import argparse
import logging

from .image.bmp import BmpQRImage
from .image.png import PngQRImage
from .image.raster import module_size
from .image.svg import SvgQRImage
from .qrcode.errors import DataTooLongError
from .qrcode.qrcode import QRCode


def positive_int(value):
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(
            "{} is not a positive integer".format(value)
        )
    return number


parser = argparse.ArgumentParser(
    prog="squares",
    description="Generate an image of QR code",
)
parser.add_argument(
    "--file-type",
    type=str,
    default="png",
    choices=["svg", "png", "bmp"],
    help="Generated image filetype."
)
size_group = parser.add_mutually_exclusive_group()
size_group.add_argument(
    "--scale",
    type=positive_int,
    default=None,
    help="Module size in pixels (default 8)."
)
size_group.add_argument(
    "--pixel-size",
    type=positive_int,
    default=None,
    help="Target image width in pixels, quiet zone included. "
         "Module size is the largest that fits."
)
parser.add_argument(
    "--mask",
    type=int,
    default=None,
    choices=range(8),
    help="Force mask pattern instead of the lowest penalty one."
)
parser.add_argument(
    "--verbose",
    action="store_true",
    help="Log version and mask selection."
)
parser.add_argument(
    "content",
    type=str,
    help="Content of QR code."
)
parser.add_argument(
    "out",
    type=str,
    help="Output path."
)


def main(cmd_args=None):
    image_classes = {
        "svg": SvgQRImage,
        "png": PngQRImage,
        "bmp": BmpQRImage
    }
    args = parser.parse_args(cmd_args)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )
    image_class = image_classes.get(args.file_type)
    if image_class is None:
        raise ValueError(
            "Unknown image file type {!r}".format(args.file_type)
        )
    try:
        qr = QRCode(args.content, args.mask)
    except DataTooLongError as error:
        parser.error(str(error))
    if args.pixel_size is not None:
        try:
            scale = module_size(qr.size, args.pixel_size)
        except ValueError as error:
            parser.error(str(error))
    else:
        scale = args.scale
    image = image_class(qr._image_bits(), scale)
    with open(args.out, image.file_open_mode) as image_file:
        image.write(image_file)


if __name__ == "__main__":
    main()
