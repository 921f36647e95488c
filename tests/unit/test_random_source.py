"""Unit tests for the random data source."""

from __future__ import annotations

import re
import zlib
from unittest.mock import patch

import pytest

from object_generator.config import ConfigurationError
from object_generator.core.exceptions import RandomSourceError
from object_generator.services import RandomSource, new_random_source
from tests.factories import create_generator_config, drain

NAME_PATTERN = re.compile(r"^(\d+)\.([A-Za-z0-9]{16})\.rnd$")


@pytest.mark.unit
class TestRandomSourceConstruction:
    """Tests for RandomSource construction."""

    def test_creates_source(self) -> None:
        """Valid configuration creates a source."""
        source = new_random_source(create_generator_config(source="random"))

        assert isinstance(source, RandomSource)
        assert source.content_type == "application/octet-stream"

    def test_non_positive_block_size_rejected(self) -> None:
        """A non-positive block size fails construction."""
        config = create_generator_config(random={"block_size": 0})

        with pytest.raises(ConfigurationError, match="random: size <= 0"):
            new_random_source(config)

    def test_block_size_capped_to_total(self) -> None:
        """Seed buffer never exceeds the total object size."""
        config = create_generator_config(total_size=100, random={"block_size": 4096})

        source = new_random_source(config)

        assert len(source._seed) == 100


@pytest.mark.unit
class TestRandomSourceObjects:
    """Tests for produced objects."""

    def test_size_fidelity_fixed(self) -> None:
        """Stream length equals the reported size."""
        source = new_random_source(create_generator_config(total_size=5000))

        obj = source.produce_object()

        assert obj.size == 5000
        assert len(drain(obj)) == 5000

    def test_size_fidelity_randomized(self) -> None:
        """Randomized sizes still match their streams exactly."""
        config = create_generator_config(total_size=3000, randomize_size=True)
        source = new_random_source(config)

        for _ in range(20):
            obj = source.produce_object()
            assert 1 <= obj.size <= 3000
            assert len(drain(obj)) == obj.size

    def test_name_format_and_counter(self) -> None:
        """Names carry an increasing counter, a 16-char suffix and .rnd."""
        source = new_random_source(create_generator_config())

        names = [source.produce_object().name for _ in range(3)]

        counters = [int(NAME_PATTERN.match(name).group(1)) for name in names]
        assert counters == [1, 2, 3]

    def test_names_are_unique(self) -> None:
        """Sequential names are pairwise distinct."""
        source = new_random_source(create_generator_config(total_size=16))

        names = [source.produce_object().name for _ in range(500)]

        assert len(set(names)) == 500

    def test_resynthesize_data_is_incompressible(self) -> None:
        """Fresh secure bytes do not compress."""
        source = new_random_source(create_generator_config(total_size=20_000))

        data = drain(source.produce_object())

        assert len(zlib.compress(data, 9)) >= len(data)

    def test_resynthesize_objects_differ(self) -> None:
        """Consecutive objects carry different content, even under a seed."""
        source = new_random_source(create_generator_config(total_size=512, seed=1))

        assert drain(source.produce_object()) != drain(source.produce_object())

    def test_buffer_not_aliased(self) -> None:
        """Producing a later object leaves earlier bytes intact."""
        source = new_random_source(create_generator_config(total_size=1024))
        first = source.produce_object()
        before = drain(first)

        drain(source.produce_object())
        first.stream.seek(0)

        assert drain(first) == before

    def test_random_source_failure_propagates(self) -> None:
        """A failing secure source aborts only that object."""
        source = new_random_source(create_generator_config(total_size=64))

        with (
            patch(
                "object_generator.services.synthesizer.os.urandom",
                side_effect=OSError("entropy unavailable"),
            ),
            pytest.raises(RandomSourceError),
        ):
            source.produce_object()

        obj = source.produce_object()
        assert len(drain(obj)) == 64
        assert int(NAME_PATTERN.match(obj.name).group(1)) == 2


@pytest.mark.unit
class TestRandomSourceReuseStrategy:
    """Tests for the seed-reuse strategy."""

    def test_cycles_seed_buffer(self) -> None:
        """Objects are rotations of the seed buffer."""
        config = create_generator_config(
            total_size=1000, random={"block_size": 100, "strategy": "reuse"}
        )
        source = new_random_source(config)
        seed = bytes(source._seed.data)

        data = drain(source.produce_object())

        assert len(data) == 1000
        offset = (seed + seed).index(data[:100])
        assert data == (seed[offset:] + seed[:offset]) * 10

    def test_reproducible_under_seed(self) -> None:
        """Two sources with the same seed produce identical content."""
        config = create_generator_config(
            total_size=2048, seed=99, random={"block_size": 256, "strategy": "reuse"}
        )
        first = new_random_source(config)
        second = new_random_source(config)

        for _ in range(5):
            a = first.produce_object()
            b = second.produce_object()
            assert a.name == b.name
            assert drain(a) == drain(b)

    def test_seed_buffer_unchanged(self) -> None:
        """Producing objects never modifies the seed buffer."""
        config = create_generator_config(random={"block_size": 128, "strategy": "reuse"})
        source = new_random_source(config)
        seed = bytes(source._seed.data)

        for _ in range(10):
            drain(source.produce_object())

        assert bytes(source._seed.data) == seed


@pytest.mark.unit
class TestRandomSourceDescribe:
    """Tests for the size policy summary."""

    def test_fixed_size(self) -> None:
        """Fixed sizes report the total."""
        source = new_random_source(create_generator_config(total_size=4096))

        assert source.describe() == "Random data; 4096 bytes total"
        assert str(source) == source.describe()

    def test_random_size(self) -> None:
        """Randomized sizes report the upper bound."""
        config = create_generator_config(total_size=4096, randomize_size=True)

        assert new_random_source(config).describe() == (
            "Random data; random size up to 4096 bytes"
        )
