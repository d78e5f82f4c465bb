#!/usr/bin/env python3
"""
Unit tests for core/image_processing.py
"""

import os
import shutil
import sys
import tempfile
import unittest

from PIL import Image

# Add parent directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from quickshot.core.artifacts import ArtifactManager
from quickshot.core.codecs import EncoderBackend, PillowEncoder
from quickshot.core.errors import ArtifactNotFound, InvalidInput
from quickshot.core.image_processing import (
    ResizeSettings,
    Transform,
    choose_transform,
    compute_scale_factor,
    plan_resize,
    resize_to_budget,
    scaled_dimensions,
)
from quickshot.core.types import ImageArtifact


class FakeEncoder(EncoderBackend):
    """Writes files of scripted sizes and records every call."""

    name = "fake"

    def __init__(self, output_sizes, dimensions=(4000, 3000)):
        self.output_sizes = list(output_sizes)
        self.dimensions = dimensions
        self.calls = []
        self.probes = []

    def encode(self, source_path, target_path, quality, size=None):
        self.calls.append({"source": source_path, "quality": quality, "size": size})
        with open(target_path, "wb") as f:
            f.write(b"\xff" * self.output_sizes.pop(0))

    def probe_dimensions(self, path):
        self.probes.append(path)
        return self.dimensions


class TestTransformDecision(unittest.TestCase):
    """Test cases for choosing the first transform"""

    def test_pass_through_at_or_below_budget(self):
        self.assertIs(choose_transform(100, 200), Transform.PASS_THROUGH)
        self.assertIs(choose_transform(200, 200), Transform.PASS_THROUGH)

    def test_compress_only_below_twice_budget(self):
        self.assertIs(choose_transform(201, 200), Transform.COMPRESS_ONLY)
        self.assertIs(choose_transform(399, 200), Transform.COMPRESS_ONLY)
        self.assertIs(choose_transform(5_000_000, 4_500_000), Transform.COMPRESS_ONLY)

    def test_resize_at_twice_budget_or_more(self):
        self.assertIs(choose_transform(400, 200), Transform.RESIZE)
        self.assertIs(choose_transform(36_000_000, 4_500_000), Transform.RESIZE)


class TestScaleFactor(unittest.TestCase):
    """Test cases for the scale estimate"""

    def test_reference_capture(self):
        """4000x3000 with the default budget scales to about 0.779"""
        scale = compute_scale_factor(4000 * 3000, 4_500_000)
        self.assertAlmostEqual(scale, 0.77942, places=4)

        plan = plan_resize(4000, 3000, 4_500_000)
        self.assertEqual((plan.width, plan.height), (3118, 2338))
        self.assertEqual(plan.quality, 85)

    def test_clamped_to_minimum(self):
        self.assertEqual(compute_scale_factor(100_000_000, 1_000), 0.3)

    def test_clamped_to_maximum(self):
        self.assertEqual(compute_scale_factor(100, 4_500_000), 1.0)
        self.assertEqual(compute_scale_factor(0, 4_500_000), 1.0)

    def test_monotonic_in_pixel_count(self):
        scales = [
            compute_scale_factor(pixels, 4_500_000)
            for pixels in (1_000_000, 5_000_000, 12_000_000, 40_000_000, 200_000_000)
        ]
        self.assertEqual(scales, sorted(scales, reverse=True))

    def test_monotonic_in_budget(self):
        scales = [
            compute_scale_factor(12_000_000, budget)
            for budget in (1_000, 500_000, 2_000_000, 4_500_000, 20_000_000)
        ]
        self.assertEqual(scales, sorted(scales))
        for scale in scales:
            self.assertGreaterEqual(scale, 0.3)

    def test_custom_settings(self):
        settings = ResizeSettings(min_scale_factor=0.5, safety_margin=1.0)
        self.assertEqual(compute_scale_factor(100_000_000, 1_000, settings), 0.5)

    def test_dimensions_never_below_one_pixel(self):
        self.assertEqual(scaled_dimensions(1, 1, 0.3), (1, 1))
        self.assertEqual(scaled_dimensions(3, 1, 0.3), (1, 1))
        self.assertEqual(scaled_dimensions(1000, 10, 0.3), (300, 3))


class TestResizeToBudget(unittest.TestCase):
    """Test cases for resize_to_budget with a scripted encoder"""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.work_dir = os.path.join(self.temp_dir, "work")
        self.source = os.path.join(self.temp_dir, "source.png")

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _artifact(self, size, width=4000, height=3000):
        with open(self.source, "wb") as f:
            f.write(b"\x00" * size)
        return ImageArtifact.from_path(self.source, width=width, height=height)

    def test_pass_through_returns_input_unchanged(self):
        artifact = self._artifact(100)
        encoder = FakeEncoder([])

        with ArtifactManager(self.work_dir) as artifacts:
            result = resize_to_budget(artifact, 200, encoder, artifacts)
            self.assertEqual(artifacts.owned, [])

        self.assertEqual(result.path, self.source)
        self.assertEqual(result.byte_length, 100)
        self.assertEqual(encoder.calls, [])

    def test_compress_only_success(self):
        artifact = self._artifact(300)
        encoder = FakeEncoder([150])

        with ArtifactManager(self.work_dir) as artifacts:
            result = resize_to_budget(artifact, 200, encoder, artifacts)
            self.assertTrue(os.path.exists(result.path))

        self.assertEqual(len(encoder.calls), 1)
        self.assertEqual(encoder.calls[0]["quality"], 85)
        self.assertIsNone(encoder.calls[0]["size"])
        self.assertEqual(result.byte_length, 150)
        self.assertEqual(result.format, "jpeg")
        self.assertNotEqual(result.path, self.source)

    def test_compress_only_falls_through_to_resize(self):
        artifact = self._artifact(300)
        encoder = FakeEncoder([250, 120])

        with ArtifactManager(self.work_dir) as artifacts:
            result = resize_to_budget(artifact, 200, encoder, artifacts)
            # The insufficient compression pass is released immediately
            self.assertEqual(artifacts.owned, [result.path])

        self.assertEqual(len(encoder.calls), 2)
        self.assertIsNone(encoder.calls[0]["size"])
        self.assertEqual(encoder.calls[1]["size"], (1200, 900))
        self.assertEqual(result.byte_length, 120)
        self.assertEqual((result.width, result.height), (1200, 900))

    def test_resize_probes_unknown_dimensions(self):
        artifact = self._artifact(1000, width=None, height=None)
        encoder = FakeEncoder([150], dimensions=(400, 300))

        with ArtifactManager(self.work_dir) as artifacts:
            result = resize_to_budget(artifact, 200, encoder, artifacts)

        self.assertEqual(encoder.probes, [self.source])
        self.assertEqual(encoder.calls[0]["size"], (120, 90))
        self.assertEqual((result.width, result.height), (120, 90))

    def test_overshoot_is_returned_as_best_effort(self):
        artifact = self._artifact(1000)
        encoder = FakeEncoder([500])

        with ArtifactManager(self.work_dir) as artifacts:
            result = resize_to_budget(artifact, 200, encoder, artifacts)

        self.assertEqual(len(encoder.calls), 1)
        self.assertEqual(result.byte_length, 500)

    def test_input_is_never_deleted(self):
        artifact = self._artifact(1000)
        with ArtifactManager(self.work_dir) as artifacts:
            resize_to_budget(artifact, 200, FakeEncoder([100]), artifacts)
        self.assertTrue(os.path.exists(self.source))

    def test_rejects_non_positive_budget(self):
        artifact = self._artifact(100)
        with ArtifactManager(self.work_dir) as artifacts:
            with self.assertRaises(InvalidInput):
                resize_to_budget(artifact, 0, FakeEncoder([]), artifacts)
            with self.assertRaises(InvalidInput):
                resize_to_budget(artifact, -5, FakeEncoder([]), artifacts)

    def test_missing_input(self):
        artifact = ImageArtifact(path=os.path.join(self.temp_dir, "gone.png"), byte_length=10)
        with ArtifactManager(self.work_dir) as artifacts:
            with self.assertRaises(ArtifactNotFound):
                resize_to_budget(artifact, 200, FakeEncoder([]), artifacts)


class TestResizeWithPillow(unittest.TestCase):
    """Test cases running the real in-process codec"""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.source = os.path.join(self.temp_dir, "noise.png")
        # Random pixels do not compress, so the PNG is far above the budget
        Image.frombytes("RGB", (200, 150), os.urandom(200 * 150 * 3)).save(self.source)

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_resize_produces_scaled_jpeg(self):
        artifact = ImageArtifact.from_path(self.source, width=200, height=150)

        with ArtifactManager(self.temp_dir) as artifacts:
            result = resize_to_budget(artifact, 10_000, PillowEncoder(), artifacts)
            with Image.open(result.path) as img:
                self.assertEqual(img.format, "JPEG")
                self.assertEqual(img.size, (147, 110))

    def test_pass_through_keeps_path(self):
        artifact = ImageArtifact.from_path(self.source)

        with ArtifactManager(self.temp_dir) as artifacts:
            result = resize_to_budget(artifact, artifact.byte_length, PillowEncoder(), artifacts)

        self.assertEqual(result.path, self.source)
        self.assertTrue(os.path.exists(self.source))


if __name__ == "__main__":
    unittest.main()
