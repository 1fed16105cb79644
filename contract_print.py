#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Render billboard rental contracts to PDF and printable HTML.
"""

# local repo modules
import billboard_contract_print.cli


if __name__ == "__main__":
	billboard_contract_print.cli.main()
