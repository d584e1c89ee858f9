# -*- coding: utf-8 -*-
"""
Services package: text processing for blog posts plus the microCMS and
Slack HTTP clients.
"""
