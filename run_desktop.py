#!/usr/bin/env python3
"""
Desktop version of the Student Management System
"""

import sys

from student_manager.cli import desktop_main

if __name__ == "__main__":
    sys.exit(desktop_main())
