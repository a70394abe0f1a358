"""Shared fixtures for smartcapture tests."""

import pytest

from smartcapture.testing import coordinate_image, face_landmarks
from smartcapture.types import CaptureConfig, CaptureSession


@pytest.fixture
def frontal_landmarks():
    """468 points spanning [0.3, 0.7] x [0.2, 0.6], level pose for both strategies."""
    return face_landmarks(box=(0.3, 0.7, 0.2, 0.6))


@pytest.fixture
def image():
    return coordinate_image(1000, 1000)


@pytest.fixture
def config():
    return CaptureConfig(max_captures=3, max_yaw_degrees=12.0, max_pitch_degrees=10.0, padding=0.3)


@pytest.fixture
def session(config):
    return CaptureSession.for_config(config)
