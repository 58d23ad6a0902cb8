# src/blockscope/utils/config.py

class Config:
    # Explorer configuration
    WINDOW_SIZE = 20  # most recent blocks shown on the list screen

    # Display configuration
    BLOCK_HASH_PREVIEW_LENGTH = 20
    ADDRESS_PREVIEW_LENGTH = 10
    CONTRACT_CREATION_LABEL = "Contract Creation"
    EMPTY_DATA = "0x"

    # Provider configuration
    DEFAULT_NETWORK = "eth-mainnet"
    ALCHEMY_URL_TEMPLATE = "https://{network}.g.alchemy.com/v2/{api_key}"
    KNOWN_NETWORKS = (
        "eth-mainnet",
        "eth-sepolia",
        "eth-holesky",
        "polygon-mainnet",
        "polygon-amoy",
        "arb-mainnet",
        "opt-mainnet",
        "base-mainnet",
    )

    # Server configuration
    DEFAULT_HOST = "127.0.0.1"
    DEFAULT_PORT = 8000
    DEFAULT_CONFIG_PATH = "config/blockscope.yaml"
