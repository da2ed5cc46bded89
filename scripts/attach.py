#!/usr/bin/env python3
"""
ReliefFinance Attach Script
Binds to an existing ReliefFinance deployment without sending a transaction

Usage:
    python scripts/attach.py --network sepolia 0x...
    python scripts/attach.py --network sepolia   # uses deployments/sepolia_deployment.json
"""

import sys

from relief_deploy.cli import attach_main

if __name__ == "__main__":
    sys.exit(attach_main())
