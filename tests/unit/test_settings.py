"""Tests for environment-driven configuration."""

from kafka.codec import has_gzip, has_lz4, has_snappy, has_zstd

from config import Settings

CODEC_AVAILABLE = {
    "gzip": has_gzip,
    "lz4": has_lz4,
    "snappy": has_snappy,
    "zstd": has_zstd,
}


class TestSettings:
    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("TICKSTATS_REFRESH_INTERVAL_MS", "250")
        monkeypatch.setenv("TICKSTATS_TICK_STORE", "redis")
        s = Settings()
        assert s.refresh_interval_ms == 250
        assert s.tick_store == "redis"

    def test_default_compression_codec_is_installed(self):
        codec = Settings().kafka_producer_compression
        assert CODEC_AVAILABLE[codec]()

    def test_only_consumed_options(self):
        assert "api_host" not in Settings.model_fields
        assert "api_port" not in Settings.model_fields
