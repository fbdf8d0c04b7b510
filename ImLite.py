from PIL import Image as PIM
import numpy as np

import matplotlib.pyplot as plt


class Image(object):
    """Image

    An 8-bit RGB frame buffer addressed in window coordinates: the origin is
    the center of the frame and y grows upward.
    """

    def __init__(self, path=None, pixels=None, **kwargs):
        # You can do Image(pixels=...) or Image(path)
        self._samples = None;
        self.file_path = None;
        if (isinstance(path, np.ndarray) and (pixels is None)):
            # if the path looks like pixels and pixels are undefined, treat the path as pixels
            pixels = path;
        else:
            self.file_path = path;
        self.pixels = pixels;
        if(self.file_path is not None and pixels is None):
            self.loadImageData(self.file_path);

    @classmethod
    def Blank(cls, width, height):
        return cls(pixels=np.zeros((height, width, 3), dtype=np.uint8));

    @property
    def pixels(self):
        return self._samples;

    @pixels.setter
    def pixels(self, data):
        self._samples = data;

    @property
    def shape(self):
        return np.asarray(self.pixels.shape)[:];

    @property
    def width(self):
        return int(self.shape[1]);

    @property
    def height(self):
        return int(self.shape[0]);

    def toBufferCoords(self, x, y):
        """Map window coordinates to (column, row) in the pixel array."""
        return x + self.width // 2, self.height - (y + self.height // 2);

    def set_point(self, x, y, color):
        """Write color at window coordinates (x, y); points off the frame are ignored."""
        bx, by = self.toBufferCoords(x, y);
        if bx < 0 or bx >= self.width:
            return;
        if by < 0 or by >= self.height:
            return;
        self.pixels[by, bx] = color.as_array();

    def get_point(self, x, y):
        bx, by = self.toBufferCoords(x, y);
        return tuple(int(c) for c in self.pixels[by, bx]);

    def loadImageData(self, path=None):
        if (path):
            self.file_path = path;
        if (self.file_path):
            pim = PIM.open(fp=self.file_path).convert('RGB');
            self._samples = np.array(pim);

    def PIL(self):
        return PIM.fromarray(np.uint8(self.pixels));

    def writeToFile(self, output_path):
        self.PIL().save(output_path);
        self.file_path = output_path;

    def show(self, title=None):
        """Display the frame and block until its window is closed."""
        Image.Show(self, title=title);

    @staticmethod
    def Show(im, title=None, **kwargs):
        if (isinstance(im, Image)):
            imdata = im.pixels;
        else:
            imdata = im;
        f = plt.figure(num=title);
        plt.imshow(imdata, interpolation='nearest', **kwargs);
        plt.axis('off');
        if (title is not None):
            plt.title(title);
        plt.show();
        plt.close(f);
