#!/usr/bin/env python3
"""
Activity Lock Check Script

Runs the activity lock decision for a webform and an identity against the
configured Supabase backend, the same way the check endpoint does. Useful for
verifying a handler configuration without opening the form.

Usage:
    python check_activity.py --webform contact_request --first Jane --last Doe --email jane@example.com
    python check_activity.py -w contact_request -f Jane -l Doe -e jane@example.com --verbose
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.dependencies import get_activity_lock_service
from domain.errors import ConfigurationError, ValidationError
from domain.identity import IdentityInput


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Check whether a webform locks for a given contact identity"
    )

    parser.add_argument(
        "--webform",
        "-w",
        required=True,
        help="Webform machine name"
    )

    parser.add_argument("--first", "-f", required=True, help="First name")
    parser.add_argument("--last", "-l", required=True, help="Last name")
    parser.add_argument("--email", "-e", required=True, help="Email address")

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every lookup"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    identity = IdentityInput.of(args.first, args.last, args.email)

    try:
        decision = get_activity_lock_service().check(identity, args.webform)

    except ValidationError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2

    except ConfigurationError as e:
        print(f"Configuration problem: {e}", file=sys.stderr)
        return 2

    except KeyboardInterrupt:
        print("\n\nCheck interrupted by user")
        return 130

    except Exception as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1

    print("=" * 60)
    print("ACTIVITY LOCK CHECK")
    print("=" * 60)
    print(f"Webform:  {args.webform}")
    print(f"Contact:  {identity.first_name} {identity.last_name} <{identity.email}>")
    print(f"Locked:   {'YES' if decision.locked else 'no'}")
    if decision.locked:
        print(f"Message:  {decision.message}")
    print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
