#!/usr/bin/env python
# encoding: utf-8
"""Barcode Test Assistant: render Code 128 / QR / Data Matrix symbols from text rules."""

__version__ = "1.0.0"
