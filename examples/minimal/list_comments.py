#!/usr/bin/env python3
"""Minimal use of the remote engine client.

This example shows:
1. Loading client config from YAML (or using a plain endpoint URL)
2. Creating a comment and reading the post back
3. Handling the server's own error text

Run against a server exposing the engine RPC endpoint:
    python list_comments.py http://localhost:8080/rpc
"""

import logging
import sys
from pathlib import Path

from comment_rpc import (
    ClientConfig,
    Comment,
    CommentRPCError,
    FindRequest,
    Locator,
    RemoteApplicationError,
    RemoteClient,
    User,
)

HERE = Path(__file__).parent


def main() -> int:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s")

    config_path = HERE / "client.yaml"
    if len(sys.argv) > 1:
        config = ClientConfig(api=sys.argv[1])
    else:
        config = ClientConfig.from_yaml(config_path)

    locator = Locator(site="demo", url="https://example.com/post-1")

    with RemoteClient(config) as client:
        try:
            comment_id = client.create(
                Comment(text="first!", user=User(name="dev", id="dev_1"), locator=locator)
            )
            print(f"created {comment_id}")

            comments = client.find(FindRequest(locator=locator, sort="+time"))
            for comment in comments:
                print(f"{comment.timestamp:%Y-%m-%d %H:%M} {comment.user.name}: {comment.text}")
            print(f"total: {client.count(FindRequest(locator=locator))}")
        except RemoteApplicationError as e:
            print(f"server refused: {e}", file=sys.stderr)
            return 1
        except CommentRPCError as e:
            print(f"rpc failed: {e}", file=sys.stderr)
            return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
