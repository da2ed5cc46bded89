#!/usr/bin/env python3
"""
ReliefFinance Deployment Script
Deploys a new ReliefFinance instance and saves the deployment info

Usage:
    python scripts/deploy.py --network sepolia
    python scripts/deploy.py --network sepolia --parameters params.json
"""

import sys

from relief_deploy.cli import deploy_main

if __name__ == "__main__":
    sys.exit(deploy_main())
