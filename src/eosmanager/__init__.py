"""
eosmanager - Arista EOS switch management over eAPI.

Session handling, command execution, response parsing and LLDP topology
building for a browser dashboard or the command line.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "1.0.0"
