import os
from dotenv import load_dotenv

# Load Environment Variables from the working directory .env
load_dotenv(os.path.join(os.getcwd(), ".env"))


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).strip().lower() in ("1", "true", "yes")


def _env_list(name: str, default: str) -> list:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    # ═══════════════════════════════════════════════════════════════════
    # JUPITER ARBITRAGE BOT CONFIGURATION (Env-Based)
    # ═══════════════════════════════════════════════════════════════════

    # --- Console ---
    SILENT_MODE = _env_bool("ARB_SILENT", False)
    LOG_DIR = os.getenv("ARB_LOG_DIR", os.path.join(os.getcwd(), "logs"))
    LOG_LEVEL = os.getenv("ARB_LOG_LEVEL", "INFO")  # Console threshold; the file log keeps DEBUG

    # --- Jupiter (quote + swap construction) ---
    API_BASE_URL = os.getenv("API_BASE_URL", "https://quote-api.jup.ag/v6")
    JUPITER_API_KEY = os.getenv("JUPITER_API_KEY", "").strip("'\" ")
    HTTP_TIMEOUT_S = _env_float("ARB_HTTP_TIMEOUT_S", 10.0)

    # --- RPC ---
    RPC_URL = os.getenv("SOLANA_RPC_URL", "https://api.mainnet-beta.solana.com")
    CONFIRM_TIMEOUT_S = _env_float("ARB_CONFIRM_TIMEOUT_S", 60.0)
    SKIP_PREFLIGHT = _env_bool("ARB_SKIP_PREFLIGHT", False)

    # --- Wallet (Solana CLI keypair file: JSON array of 64 ints) ---
    WALLET_PATH = os.getenv("WALLET_PATH", "./your_wallet.json")

    # --- Token Pair ---
    USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
    USDC_DECIMALS = 6
    SOL_MINT = "So11111111111111111111111111111111111111112"
    SOL_DECIMALS = 9

    # --- Strategy ---
    INITIAL_AMOUNT = int(os.getenv("ARB_INITIAL_AMOUNT", "10000000"))  # 10 USDC
    MIN_PROFIT_PCT = _env_float("ARB_MIN_PROFIT_PCT", 0.01)  # Percent, not ratio
    SLIPPAGE_BPS = int(os.getenv("ARB_SLIPPAGE_BPS", "500"))  # 5%

    FORWARD_DEXES = _env_list(
        "ARB_FORWARD_DEXES",
        "Whirlpool,Meteora DLMM,Raydium CLMM,Fluxbeam,Dexlab,Orca",
    )
    BACKWARD_DEXES = _env_list(
        "ARB_BACKWARD_DEXES",
        "Whirlpool,Meteora DLMM,Raydium CLMM,Fluxbeam,Dexlab,Orca,Serum",
    )

    # --- Timing (seconds) ---
    CYCLE_DELAY_S = _env_float("ARB_CYCLE_DELAY_S", 1.0)
    LEG_DELAY_S = _env_float("ARB_LEG_DELAY_S", 0.2)
    FAILURE_BACKOFF_S = _env_float("ARB_FAILURE_BACKOFF_S", 1.0)
