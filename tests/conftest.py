import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest  # noqa: E402

from orrery import DrawingSurface  # noqa: E402


class RecordingSurface(DrawingSurface):
    """Drawing surface that records every call instead of drawing."""

    def __init__(self, width=1400, height=800):
        self.width = width
        self.height = height
        self.scale = 1.0
        self.calls = []
        self.unavailable = False

    def _check(self):
        if self.unavailable:
            from orrery import SurfaceUnavailable

            raise SurfaceUnavailable("gone")

    def get_size(self):
        self._check()
        return (self.width, self.height)

    def set_size(self, width, height):
        self.width, self.height = width, height

    def clear(self, x, y, width, height):
        self._check()
        self.calls.append(("clear", x, y, width, height))

    def fill_rect(self, x, y, width, height, color):
        self.calls.append(("fill_rect", x, y, width, height, tuple(color)))

    def fill_circle(self, center, radius, color):
        self.calls.append(("fill_circle", tuple(center), radius, tuple(color)))

    def stroke_circle(self, center, radius, color, width=1):
        self.calls.append(("stroke_circle", tuple(center), radius, tuple(color), width))

    def fill_text(self, text, position, color, size):
        self.calls.append(("fill_text", text, tuple(position), tuple(color), size))

    def set_transform(self, scale):
        self.scale = scale
        self.calls.append(("set_transform", scale))

    def reset_transform(self):
        self.scale = 1.0
        self.calls.append(("reset_transform",))

    def named(self, name):
        return [c for c in self.calls if c[0] == name]


class ManualFrames:
    """Frame scheduler that only runs callbacks when told to."""

    def __init__(self):
        self.pending = []

    def request_frame(self, callback):
        self.pending.append(callback)

    def tick(self):
        callbacks, self.pending = self.pending, []
        for callback in callbacks:
            callback()
        return len(callbacks)


def koi_record(koi, rplanet=1.0, tplanet=288, a=1.0, per=365.0, rstar=1.0, tstar=5778):
    return {
        "KOI": koi,
        "RSTAR": rstar,
        "TSTAR": tstar,
        "RPLANET": rplanet,
        "TPLANET": tplanet,
        "A": a,
        "PER": per,
    }


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def frames():
    return ManualFrames()


@pytest.fixture
def sun_records():
    return [koi_record(1.01)]


@pytest.fixture
def kepler20_records():
    return [
        koi_record(70.01, rplanet=2.75, tplanet=755, a=0.0926, per=10.854, rstar=0.94, tstar=5466),
        koi_record(70.02, rplanet=1.91, tplanet=1040, a=0.0453, per=3.6961, rstar=0.94, tstar=5466),
        koi_record(70.03, rplanet=3.07, tplanet=369, a=0.3463, per=77.612, rstar=0.94, tstar=5466),
    ]


@pytest.fixture
def make_record():
    return koi_record


@pytest.fixture
def make_surface():
    return RecordingSurface
