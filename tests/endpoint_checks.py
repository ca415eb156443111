"""
Smoke checks against a running Famous Since API.

Verifies the public/protected split of the site switch endpoints and the
waitlist, the way a deploy is checked before flipping `deploy_site`.

Usage:
    python -m tests.endpoint_checks                      # Check localhost
    python -m tests.endpoint_checks --url https://api.famousince.com
    python -m tests.endpoint_checks --token <admin session token>
    python -m tests.endpoint_checks --save               # Write a JSON report
"""
import json
import asyncio
import argparse
import os
import time
from pathlib import Path
from datetime import datetime
from typing import Optional
import httpx


API_BASE_URL = "http://localhost:8000"
RESULTS_PATH = Path(__file__).parent.parent / "data" / "endpoint_checks"

# (name, method, path, body, expected status without a session)
PUBLIC_CHECKS = [
    ("site_config_status_requires_session", "GET", "/api/site-config/status", None, 401),
    ("site_config_is_public", "GET", "/api/site-config", None, 200),
    ("site_config_update_requires_session", "POST", "/api/site-config", {"key": "deploy_site", "value": True}, 401),
    ("waitlist_stats_are_public", "GET", "/api/waitlist", None, 200),
    ("waitlist_admin_requires_session", "GET", "/api/waitlist/admin", None, 401),
    ("check_role_requires_session", "GET", "/api/auth/check-role", None, 401),
    ("connect_requires_session", "GET", "/api/stripe/connect/check-status", None, 401),
    ("api_root_is_served", "GET", "/", None, 200),
    ("database_is_reachable", "GET", "/api/health/db", None, 200),
]

# Run only when an admin session token is supplied
ADMIN_CHECKS = [
    ("check_role_reports_admin", "GET", "/api/auth/check-role", None, 200),
    ("site_config_status_with_session", "GET", "/api/site-config/status", None, 200),
    ("waitlist_admin_with_session", "GET", "/api/waitlist/admin", None, 200),
]


class EndpointChecker:
    """Runs status-code checks against the API and collects results."""

    def __init__(self, base_url: str = API_BASE_URL, token: Optional[str] = None):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.run_id = f"checks_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        self.results = []

    async def run_check(self, client: httpx.AsyncClient, check: tuple, headers: dict) -> dict:
        name, method, path, body, expected = check
        print(f"\n{method} {path}")

        start_time = time.time()
        try:
            response = await client.request(method, f"{self.base_url}{path}", json=body, headers=headers)
            elapsed_time = time.time() - start_time
            passed = response.status_code == expected
            result = {
                "check": name,
                "path": path,
                "status": "passed" if passed else "failed",
                "expected_status": expected,
                "actual_status": response.status_code,
                "response": response.text[:200],
                "response_time_seconds": round(elapsed_time, 2),
                "error": None
            }
            marker = "✓" if passed else "✗"
            print(f"  {marker} HTTP {response.status_code} (expected {expected}) in {elapsed_time:.2f}s")

            if name == "site_config_is_public" and passed:
                deploy = next((c for c in response.json().get("data", []) if c.get("key") == "deploy_site"), None)
                if deploy is not None:
                    print(f"  Deploy site status: {'ENABLED' if deploy['value'] else 'DISABLED'}")

        except httpx.HTTPError as e:
            result = {
                "check": name,
                "path": path,
                "status": "error",
                "expected_status": expected,
                "actual_status": None,
                "response": None,
                "response_time_seconds": round(time.time() - start_time, 2),
                "error": str(e)
            }
            print(f"  ✗ Exception: {e}")

        return result

    async def run_checks(self) -> list:
        print(f"\n{'#'*60}")
        print(f"# Endpoint checks: {self.run_id}")
        print(f"# API: {self.base_url}")
        print(f"{'#'*60}")

        async with httpx.AsyncClient(timeout=30.0) as client:
            for check in PUBLIC_CHECKS:
                self.results.append(await self.run_check(client, check, headers={}))

            if self.token:
                headers = {"Authorization": f"Bearer {self.token}"}
                for check in ADMIN_CHECKS:
                    self.results.append(await self.run_check(client, check, headers=headers))
            else:
                print("\nNo admin token given, skipping authenticated checks.")

        return self.results

    def generate_report(self) -> dict:
        if not self.results:
            return {"error": "No results to report"}

        total = len(self.results)
        passed = sum(1 for r in self.results if r["status"] == "passed")
        return {
            "run_id": self.run_id,
            "base_url": self.base_url,
            "timestamp": datetime.now().isoformat(),
            "summary": {
                "total_checks": total,
                "passed": passed,
                "failed": sum(1 for r in self.results if r["status"] == "failed"),
                "errors": sum(1 for r in self.results if r["status"] == "error"),
                "pass_rate": round(passed / total * 100, 1)
            },
            "failed_checks": [r for r in self.results if r["status"] != "passed"],
            "all_results": self.results
        }

    def print_report(self, report: dict):
        print(f"\n{'='*60}")
        print("CHECK SUMMARY")
        print(f"{'='*60}")

        summary = report["summary"]
        print(f"\nTotal Checks: {summary['total_checks']}")
        print(f"  ✓ Passed: {summary['passed']}")
        print(f"  ✗ Failed: {summary['failed']}")
        print(f"  ⚠ Errors: {summary['errors']}")

        for check in report["failed_checks"]:
            print(f"\n  [{check['check']}] {check['path']}")
            print(f"    Expected: {check['expected_status']}, Got: {check['actual_status']}")
            if check.get("error"):
                print(f"    Error: {check['error'][:100]}")

        print(f"\n{'='*60}\n")

    def save_results(self, report: dict):
        RESULTS_PATH.mkdir(parents=True, exist_ok=True)
        filepath = RESULTS_PATH / f"{self.run_id}.json"
        with open(filepath, "w") as f:
            json.dump(report, f, indent=2)
        print(f"Results saved to: {filepath}")


async def main():
    parser = argparse.ArgumentParser(description="Check a running Famous Since API")
    parser.add_argument("--url", default=API_BASE_URL, help="API base URL")
    parser.add_argument("--token", default=os.getenv("ADMIN_SESSION_TOKEN"), help="Admin session token")
    parser.add_argument("--save", "-s", action="store_true", help="Save results to file")

    args = parser.parse_args()

    checker = EndpointChecker(base_url=args.url, token=args.token)
    await checker.run_checks()

    report = checker.generate_report()
    checker.print_report(report)

    if args.save:
        checker.save_results(report)

    if report["summary"]["failed"] > 0 or report["summary"]["errors"] > 0:
        return 1
    return 0


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    exit(exit_code)
