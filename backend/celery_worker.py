#!/usr/bin/env python3
"""
Celery worker startup script for the proctoring service
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from proctor_app.core.celery_app import celery_app

if __name__ == '__main__':
    celery_app.start()
