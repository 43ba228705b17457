import json
from dataclasses import dataclass

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from jupiter_arb.shared.execution.errors import WalletLoadError


@dataclass(frozen=True)
class Wallet:
    """
    Signing keypair, loaded once at startup and shared read-only.
    Responsibility: expose the keypair and its public address for signing.
    """
    keypair: Keypair

    @property
    def pubkey(self) -> Pubkey:
        return self.keypair.pubkey()

    def get_public_key(self) -> str:
        """Return pubkey as base58 string."""
        return str(self.keypair.pubkey())


def load_wallet(path: str) -> Wallet:
    """
    Load a Solana CLI keypair file (JSON array of 64 ints).

    Raises WalletLoadError when the file is missing or malformed.
    """
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise WalletLoadError(f"Wallet file not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise WalletLoadError(f"Failed to read wallet file {path}: {e}") from e

    if not isinstance(data, list) or not all(isinstance(b, int) for b in data):
        raise WalletLoadError(f"Wallet file {path} must contain a JSON array of byte values")

    try:
        secret_bytes = bytes(data)
    except ValueError as e:
        raise WalletLoadError(f"Wallet file {path} contains non-byte values: {e}") from e

    if len(secret_bytes) != 64:
        raise WalletLoadError(f"Wallet file {path} must hold 64 bytes, got {len(secret_bytes)}")

    try:
        keypair = Keypair.from_bytes(secret_bytes)
    except Exception as e:
        raise WalletLoadError(f"Invalid keypair bytes in {path}: {e}") from e

    return Wallet(keypair=keypair)
