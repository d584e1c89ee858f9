# -*- coding: utf-8 -*-
"""
blog_stack: microCMS blog publishing, read client and form notifications.
"""

__version__ = "1.0.0"
