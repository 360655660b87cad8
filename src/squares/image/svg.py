from .image import QRImage


class SvgQRImage(QRImage):
    """QR code as an .svg document of black rectangles on white"""
    file_open_mode = "w"

    SVG_OPEN = (
        '<svg xmlns="http://www.w3.org/2000/svg" version="1.1"'
        ' width="{width}" height="{height}"'
        ' viewBox="0 0 {width} {height}" shape-rendering="crispEdges">\n'
    )
    SVG_CLOSE = "</svg>\n"
    RECTANGLE = '    <rect x="{}" y="{}" width="{}" height="{}" fill="{}" />\n'

    def rectangles(self):
        """Yield (x, y, width, height) in modules covering all dark modules

        Runs of dark modules in a row are grown downwards while the rows
        below contain the same run.
        """
        bits = [list(line) for line in self.data_bits]
        rows = len(bits)
        cols = len(bits[0])
        for y in range(rows):
            x = 0
            while x < cols:
                if not bits[y][x]:
                    x += 1
                    continue
                end = x
                while end < cols and bits[y][end]:
                    end += 1
                height = 1
                while y + height < rows and all(bits[y + height][x:end]):
                    bits[y + height][x:end] = [0] * (end - x)
                    height += 1
                yield (x, y, end - x, height)
                x = end

    def _rect(self, x, y, width, height, fill):
        return self.RECTANGLE.format(x, y, width, height, fill)

    def _write_header(self, image_file):
        width = self.image_width
        height = self.image_height
        image_file.write(self.SVG_OPEN.format(width=width, height=height))
        image_file.write(self._rect(0, 0, width, height, "#fff"))

    def _write_squares(self, image_file):
        s = self.scale
        for x, y, width, height in self.rectangles():
            image_file.write(self._rect(x * s, y * s, width * s, height * s, "#000"))

    def _write_finish(self, image_file):
        image_file.write(self.SVG_CLOSE)
