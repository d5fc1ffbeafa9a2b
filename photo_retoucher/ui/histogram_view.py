from PIL import Image, ImageDraw

from ..config import settings
from ..processing.histogram import BINS
from ..utils.logger import get_logger

logger = get_logger(__name__)


class HistogramView:
    """Draws a HistogramResult as three translucent area charts (R, G, B)."""

    def __init__(self, width=None, height=None, background=None, channel_colors=None):
        cfg = settings.HISTOGRAM_RENDER
        self.width = int(width or cfg["width"])
        self.height = int(height or cfg["height"])
        self.background = tuple(background or cfg["background"])
        self.channel_colors = tuple(channel_colors or cfg["channel_colors"])

    def _channel_polygon(self, counts, max_value):
        w, h = self.width, self.height
        bar_width = w / BINS
        points = [(0, h)]
        for k in range(BINS):
            # Buckets above max_value (e.g. clipped 0/255) run off the top
            bar_h = (counts[k] / max_value) * h
            points.append((k * bar_width, max(0.0, h - bar_h)))
        points.append((w, h))
        return points

    def render(self, result):
        """
        Returns an RGBA Pillow image of the histogram.

        Each channel is filled onto its own layer and alpha-composited so the
        overlaps blend the way stacked translucent fills do.
        """
        canvas = Image.new("RGBA", (self.width, self.height), self.background)
        max_value = max(1, int(result.max_value))
        for counts, color in zip(result.channels, self.channel_colors):
            layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
            ImageDraw.Draw(layer).polygon(self._channel_polygon(counts, max_value), fill=tuple(color))
            canvas = Image.alpha_composite(canvas, layer)
        return canvas

    def save(self, result, file_path):
        image = self.render(result)
        image.save(file_path, format="PNG")
        logger.info("Saved histogram to %s", file_path)
        return file_path


def render_histogram(result, width=None, height=None):
    return HistogramView(width, height).render(result)


def save_histogram(result, file_path, width=None, height=None):
    return HistogramView(width, height).save(result, file_path)
