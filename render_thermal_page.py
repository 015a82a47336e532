#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Render a block document into a monochrome thermal printer page.
"""

# local repo modules
import thermal_page_editor.cli


if __name__ == "__main__":
	thermal_page_editor.cli.main()
