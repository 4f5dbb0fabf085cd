#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Minimal setup.py for garchlik; all metadata lives in pyproject.toml.
Kept so that legacy tooling invoking ``python setup.py`` still works.
"""

import setuptools

if __name__ == "__main__":
    setuptools.setup()
