"""
Config + Logger Unit Tests
==========================
ArbConfig snapshotting and Logger source parsing / silent mode.
"""

import logging

import pytest

from config.settings import Settings
from jupiter_arb.arbiter.core.cycle_controller import ArbConfig
from jupiter_arb.shared.system.logging import Logger, file_logger


class TestArbConfig:

    def test_defaults_match_original_bot(self):
        cfg = ArbConfig.from_settings()

        assert cfg.token_a.mint == Settings.USDC_MINT
        assert cfg.token_a.decimals == 6
        assert cfg.token_b.mint == Settings.SOL_MINT
        assert cfg.token_b.decimals == 9
        assert "Serum" in cfg.backward_dexes
        assert "Serum" not in cfg.forward_dexes

    def test_snapshot_reflects_settings(self, monkeypatch):
        monkeypatch.setattr(Settings, "INITIAL_AMOUNT", 5_000_000)
        monkeypatch.setattr(Settings, "MIN_PROFIT_PCT", 0.5)
        monkeypatch.setattr(Settings, "FAILURE_BACKOFF_S", 0.0)

        cfg = ArbConfig.from_settings()

        assert cfg.initial_amount == 5_000_000
        assert cfg.min_profit_pct == 0.5
        assert cfg.failure_backoff_s == 0.0

    def test_is_immutable(self):
        cfg = ArbConfig.from_settings()

        with pytest.raises(AttributeError):
            cfg.min_profit_pct = 99.0


class TestLogger:

    def test_parse_source_tag(self):
        assert Logger._parse_source("[QUOTE] Step 1") == ("QUOTE", "Step 1")

    def test_parse_without_tag_defaults_to_system(self):
        assert Logger._parse_source("hello") == ("SYSTEM", "hello")

    def test_silent_mode_still_logs_to_file(self, caplog, capsys):
        caplog.set_level(logging.INFO, logger="JupiterArb")
        Logger.set_silent(True)
        try:
            Logger.error("[EXEC] something broke")
        finally:
            Logger.set_silent(False)

        assert "[EXEC] something broke" in caplog.text
        assert "something broke" not in capsys.readouterr().out

    def test_debug_lines_reach_the_file_log(self, caplog, capsys, monkeypatch):
        monkeypatch.setattr(Settings, "LOG_LEVEL", "INFO")
        assert file_logger.isEnabledFor(logging.DEBUG)
        caplog.set_level(logging.DEBUG, logger="JupiterArb")

        Logger.debug("[RPC] Tx confirmed: abc (812ms)")

        record = caplog.records[-1]
        assert record.levelno == logging.DEBUG
        assert record.getMessage() == "[RPC] Tx confirmed: abc (812ms)"
        assert "812ms" not in capsys.readouterr().out

    def test_console_shows_debug_when_level_allows(self, capsys, monkeypatch):
        monkeypatch.setattr(Settings, "LOG_LEVEL", "debug")
        monkeypatch.setattr(Settings, "SILENT_MODE", False)

        Logger.debug("[QUOTE] EPjF->So11 route via Whirlpool")

        assert "route via Whirlpool" in capsys.readouterr().out

    def test_critical_is_tagged_and_leveled(self, caplog, silent_logger):
        caplog.set_level(logging.INFO, logger="JupiterArb")

        Logger.critical("[EXEC] position left open")

        record = caplog.records[-1]
        assert record.levelno == logging.CRITICAL
        assert record.getMessage() == "[EXEC] 🛑 position left open"
