#!/usr/bin/env python3
"""
Console version of the Student Management System
Reads .env, creates missing tables, asks for a login, then shows the menu
"""

import sys

from student_manager.cli import console_main

if __name__ == "__main__":
    sys.exit(console_main())
