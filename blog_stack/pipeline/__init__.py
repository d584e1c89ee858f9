# -*- coding: utf-8 -*-
"""
Pipeline package: CLI entry points.
Each command logs to stderr and keeps stdout for JSON output.
"""
