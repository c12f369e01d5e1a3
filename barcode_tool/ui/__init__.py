"""UI layer of the Barcode Test Assistant.

``model`` holds Qt-free state, persistence and rendering logic,
``view`` the pure widgets, and ``controller`` the wiring between them.
"""
