"""Verification Test: Memory Leak Check.

The monitor runs for as long as the terminal stays open, so repeated sampling
must not accumulate memory. Only two network snapshots and one CPU baseline
may be alive at any time.

Sampling is driven directly rather than through the one-second timer so the
test covers thousands of ticks in a few seconds.
"""

import gc

import psutil

from conftest import write_net_dev
from minimon.monitor import SystemMonitor


def get_current_memory_mb() -> float:
    """Get current process memory usage in MB."""
    process = psutil.Process()
    return process.memory_info().rss / (1024 * 1024)


class TestMemoryLeakCheck:
    """Memory leak verification suite tests."""

    def test_sampling_memory_stability(self, fake_config):
        """
        Test that repeated sampling doesn't leak memory.

        Interfaces come and go between ticks so that stale snapshots would
        pile up if the previous one were not released.
        """
        monitor = SystemMonitor(fake_config)
        monitor.prime()

        # Warm up caches before taking the baseline
        for _ in range(50):
            monitor.sample()
        gc.collect()
        initial_memory = get_current_memory_mb()

        num_iterations = 2000
        for i in range(num_iterations):
            write_net_dev(
                fake_config.net_dev_path,
                {"eth0": (i * 1024, i * 512), f"veth{i % 7}": (i, i)},
            )
            frame = monitor.sample()
            assert frame.download_rate is not None

        gc.collect()
        final_memory = get_current_memory_mb()
        memory_delta = final_memory - initial_memory

        # Allow small increase due to Python runtime variations
        max_delta_mb = 5.0

        assert memory_delta < max_delta_mb, (
            f"Sampling leaked {memory_delta:.2f}MB over {num_iterations} iterations"
        )

    def test_only_latest_snapshot_retained(self, fake_config):
        """
        Test the previous network snapshot is replaced, not accumulated.

        After many ticks the monitor must hold exactly the last snapshot read.
        """
        monitor = SystemMonitor(fake_config)
        monitor.prime()

        for i in range(100):
            write_net_dev(fake_config.net_dev_path, {f"eth{i}": (i, i)})
            monitor.sample()

        assert monitor.previous_network is not None
        assert list(monitor.previous_network) == ["eth99"]

    def test_live_sources_memory_stability(self):
        """
        Test sampling the live kernel interfaces doesn't leak memory.

        On hosts without /proc the readers return None, which exercises the
        unavailable-metric path instead.
        """
        monitor = SystemMonitor()
        monitor.prime()

        for _ in range(20):
            monitor.sample()
        gc.collect()
        initial_memory = get_current_memory_mb()

        for _ in range(500):
            monitor.sample()

        gc.collect()
        memory_delta = get_current_memory_mb() - initial_memory

        assert memory_delta < 5.0, f"Live sampling leaked {memory_delta:.2f}MB"
