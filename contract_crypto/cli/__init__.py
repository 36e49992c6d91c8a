"""Command-line tools for contract_crypto (see `contract-crypto --help`)."""
