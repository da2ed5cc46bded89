#!/usr/bin/env python3
"""
ReliefFinance Deployment Cost Estimate
Asks the node how much gas the deployment would use without sending it

Usage:
    python scripts/estimate_deployment_cost.py --network sepolia
"""

import sys

from relief_deploy.cli import estimate_main

if __name__ == "__main__":
    sys.exit(estimate_main())
