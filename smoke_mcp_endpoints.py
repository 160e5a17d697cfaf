#!/usr/bin/env python3
"""Smoke-check a running XSEN Video MCP server the way an MCP client would connect.

This script makes real HTTP requests against a deployed or local server.

Usage:
    # Check local server
    python smoke_mcp_endpoints.py http://localhost:8080

    # Check a deployment that requires the bearer secret
    MCP_AUTH_KEY=... python smoke_mcp_endpoints.py https://xsen-mcp.example.com
"""

import json
import os
import sys
from typing import Any

import httpx


def check_health_endpoint(base_url: str) -> bool:
    """Check the /health and / endpoints."""
    print("\n[CHECK] Health Endpoint")
    print(f"  URL: {base_url}/health")

    try:
        response = httpx.get(f"{base_url}/health", timeout=10.0)
        print(f"  Status: {response.status_code}")
        if response.status_code != 200 or response.text != "OK":
            print(f"  ✗ FAILED - Unexpected response: {response.status_code} {response.text!r}")
            return False

        status = httpx.get(f"{base_url}/", timeout=10.0).json()
        print(f"  Status document: {json.dumps(status, indent=2)}")
        if status.get("videos", 0) == 0:
            print("  ! Catalog not loaded yet")
        print("  ✓ PASSED")
        return True
    except Exception as e:
        print(f"  ✗ FAILED - {type(e).__name__}: {e}")
        return False


def post_rpc(base_url: str, headers: dict[str, str], message: dict[str, Any]) -> httpx.Response:
    return httpx.post(f"{base_url}/mcp", json=message, headers=headers, timeout=10.0)


def check_initialize(base_url: str, headers: dict[str, str]) -> bool:
    """Send the initialize request and the initialized notification."""
    print("\n[CHECK] MCP Initialize")

    try:
        response = post_rpc(
            base_url,
            headers,
            {
                "jsonrpc": "2.0",
                "id": 1,
                "method": "initialize",
                "params": {
                    "protocolVersion": "2024-11-05",
                    "capabilities": {},
                    "clientInfo": {"name": "smoke-check", "version": "1.0.0"},
                },
            },
        )
        print(f"  Status: {response.status_code}")
        if response.status_code != 200:
            print(f"  ✗ FAILED - Response: {response.text}")
            return False

        result = response.json()
        print(f"  Response: {json.dumps(result, indent=2)}")
        if "result" not in result:
            print("  ✗ FAILED - No 'result' in response")
            return False

        notification = post_rpc(
            base_url, headers, {"jsonrpc": "2.0", "method": "notifications/initialized"}
        )
        if notification.status_code != 200 or notification.content:
            print(f"  ✗ FAILED - Notification answered with {notification.status_code} {notification.text!r}")
            return False

        print("  ✓ PASSED")
        return True
    except Exception as e:
        print(f"  ✗ FAILED - {type(e).__name__}: {e}")
        return False


def check_list_tools(base_url: str, headers: dict[str, str]) -> bool:
    """Check that xsen_search is advertised."""
    print("\n[CHECK] MCP List Tools")

    try:
        response = post_rpc(base_url, headers, {"jsonrpc": "2.0", "id": 2, "method": "tools/list"})
        tools = response.json().get("result", {}).get("tools", [])
        names = [tool.get("name") for tool in tools]
        print(f"  Tools: {names}")
        if "xsen_search" in names:
            print("  ✓ PASSED")
            return True
        print("  ✗ FAILED - xsen_search not listed")
        return False
    except Exception as e:
        print(f"  ✗ FAILED - {type(e).__name__}: {e}")
        return False


def check_search(base_url: str, headers: dict[str, str], query: str) -> bool:
    """Call xsen_search and print the rendered text."""
    print(f"\n[CHECK] MCP Call xsen_search ({query!r})")

    try:
        response = post_rpc(
            base_url,
            headers,
            {
                "jsonrpc": "2.0",
                "id": 3,
                "method": "tools/call",
                "params": {"name": "xsen_search", "arguments": {"query": query}},
            },
        )
        body = response.json()
        if "result" not in body:
            print(f"  ✗ FAILED - {json.dumps(body, indent=2)}")
            return False

        text = body["result"]["content"][0]["text"]
        print("  Text:")
        for line in text.splitlines():
            print(f"    {line}")
        print("  ✓ PASSED")
        return True
    except Exception as e:
        print(f"  ✗ FAILED - {type(e).__name__}: {e}")
        return False


def main() -> None:
    """Run all checks."""
    if len(sys.argv) < 2:
        print("Usage: python smoke_mcp_endpoints.py <base_url> [query]")
        print("Example: python smoke_mcp_endpoints.py http://localhost:8080 'baker mayfield'")
        sys.exit(1)

    base_url = sys.argv[1].rstrip("/")
    query = sys.argv[2] if len(sys.argv) > 2 else "baker mayfield"

    headers = {}
    secret = os.environ.get("MCP_AUTH_KEY") or os.environ.get("MCP_AUTH")
    if secret:
        headers["Authorization"] = f"Bearer {secret}"

    print("=" * 60)
    print("XSEN MCP SMOKE CHECK")
    print("=" * 60)
    print(f"Target: {base_url}")

    results = {
        "health": check_health_endpoint(base_url),
        "initialize": check_initialize(base_url, headers),
        "list_tools": check_list_tools(base_url, headers),
        "search": check_search(base_url, headers, query),
    }

    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    for name, passed in results.items():
        status = "✓ PASSED" if passed else "✗ FAILED"
        print(f"  {name:20s} {status}")

    total = len(results)
    passed = sum(1 for p in results.values() if p)
    print(f"\nTotal: {passed}/{total} passed")
    sys.exit(0 if passed == total else 1)


if __name__ == "__main__":
    main()
