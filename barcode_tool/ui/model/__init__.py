"""Model layer for the barcode page.

Everything in this package is free of Qt imports so that the rule
store, the persisted configuration and the symbol renderer can be
exercised without a display.
"""
