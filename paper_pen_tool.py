#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Inspect batched pen ink and pattern info files.
"""

import sys

import paper_pen_toolkit.cli


if __name__ == "__main__":
	sys.exit(paper_pen_toolkit.cli.main())
