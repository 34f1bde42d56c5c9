"""
Unit tests for the stealth-pki command-line tool.

Commands are driven through cli.main() with captured stdout/stderr.
"""

import json
import random

import pytest

from stealth_pki import PublicSpendKey, SecretSpendKey, StealthAddress
from stealth_pki.cli import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("STEALTH_PKI_LOG_LEVEL", "STEALTH_PKI_HEX_UPPERCASE", "STEALTH_PKI_HEX_PREFIX"):
        monkeypatch.delenv(name, raising=False)


def _run(capsys, *argv) -> tuple[int, dict | None, str]:
    code = main(list(argv))
    captured = capsys.readouterr()
    payload = json.loads(captured.out) if code == 0 else None
    return code, payload, captured.err


class TestKeygen:

    def test_random(self, capsys):
        code, bundle, _ = _run(capsys, "keygen")
        assert code == 0
        ssk = SecretSpendKey.from_hex(bundle["secret_spend_key"])
        assert ssk.public_spend_key() == PublicSpendKey.from_hex(bundle["public_spend_key"])

    def test_seeded_is_deterministic(self, capsys):
        _, first, _ = _run(capsys, "keygen", "--seed", "some bytes")
        _, second, _ = _run(capsys, "keygen", "--seed", "some bytes")
        assert first == second
        assert SecretSpendKey.from_hex(first["secret_spend_key"]) == SecretSpendKey.from_seed(b"some bytes")

    def test_empty_seed(self, capsys):
        code, _, err = _run(capsys, "keygen", "--seed", "")
        assert code == 2
        assert "error:" in err

    def test_env_rendering(self, capsys, monkeypatch):
        monkeypatch.setenv("STEALTH_PKI_HEX_PREFIX", "1")
        _, bundle, _ = _run(capsys, "keygen", "--seed", "prefixed")
        assert bundle["view_key"].startswith("0x")


class TestAddressScanRecover:
    """address → scan → recover flow."""

    def test_full_flow(self, capsys):
        ssk = SecretSpendKey.from_seed(b"recipient")

        code, record, _ = _run(capsys, "address", "--psk", ssk.public_spend_key().to_hex())
        assert code == 0
        sa = StealthAddress.from_hex(record["stealth_address"])

        code, scan, _ = _run(capsys, "scan", "--vk", ssk.view_key().to_hex(), "--address", sa.to_hex())
        assert code == 0
        assert scan == {"owned": True, "sk_r": None}

        code, recovered, _ = _run(capsys, "recover", "--ssk", ssk.to_hex(), "--address", sa.to_hex())
        assert code == 0
        assert recovered["owned"] is True
        assert recovered["sk_r"] == ssk.sk_r(sa).to_hex()

    def test_foreign_address(self, capsys):
        owner = SecretSpendKey.from_seed(b"owner")
        stranger = SecretSpendKey.from_seed(b"stranger")
        _, record, _ = _run(capsys, "address", "--psk", owner.public_spend_key().to_hex())

        _, scan, _ = _run(
            capsys, "scan", "--vk", stranger.view_key().to_hex(), "--address", record["stealth_address"]
        )
        assert scan["owned"] is False

        _, recovered, _ = _run(
            capsys, "recover", "--ssk", stranger.to_hex(), "--address", record["stealth_address"]
        )
        assert recovered == {"owned": False, "sk_r": None}

    def test_malformed_address(self, capsys):
        vk = SecretSpendKey.from_seed(b"x").view_key()
        code, _, err = _run(capsys, "scan", "--vk", vk.to_hex(), "--address", "ff" * 64)
        assert code == 2
        assert err.startswith("error:")

    def test_bad_length_key(self, capsys):
        code, _, err = _run(capsys, "address", "--psk", "00")
        assert code == 2
        assert "found 2, expected 128" in err

    def test_zero_scalar_view_key(self, capsys):
        """A view key with a = 0 is rejected, not scanned."""
        ssk = SecretSpendKey.from_seed(b"zero")
        sa = ssk.public_spend_key().new_stealth_address(random.Random(1))
        zero_vk = "00" * 32 + ssk.view_key().to_hex()[64:]
        code, _, err = _run(capsys, "scan", "--vk", zero_vk, "--address", sa.to_hex())
        assert code == 2
        assert "a must be nonzero" in err

    def test_zero_scalar_spend_key(self, capsys):
        ssk = SecretSpendKey.from_seed(b"zero")
        sa = ssk.public_spend_key().new_stealth_address(random.Random(2))
        code, _, err = _run(capsys, "recover", "--ssk", "00" * 64, "--address", sa.to_hex())
        assert code == 2
        assert err.startswith("error:")

    def test_missing_command(self):
        with pytest.raises(SystemExit):
            main([])
