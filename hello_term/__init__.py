#!/usr/bin/env python3
"""
Terminal Greeter

Prints a boxed summary of the system state (greeting, date, weather, OS release,
kernel, load, memory, disk, desktop, package updates, now playing) and exits.
"""

__version__ = "1.0.0"
