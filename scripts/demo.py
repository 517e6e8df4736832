#!/usr/bin/env python3
"""Demo: send one push notification through the FCM adapter.

Requires a Firebase service account key with the firebase.messaging scope.

Usage:
    python scripts/demo.py --project-id ID --key-file KEY.json --token DEVICE_TOKEN
"""

import argparse
import sys

from fcm_push.adapters.fcm import FCMConfig
from fcm_push.errors import ConfigError, TransportUnavailable
from fcm_push.log import setup_logging
from fcm_push.notification import FCMNotification


def main() -> None:
    parser = argparse.ArgumentParser(description="Send a demo push notification")
    parser.add_argument("--project-id", required=True, help="Firebase project id")
    parser.add_argument("--key-file", required=True, help="Service account key (JSON)")
    parser.add_argument("--token", required=True, help="Device registration token")
    parser.add_argument("--title", default="Hello from fcm-push")
    parser.add_argument("--body", default="This is a demo notification.")
    args = parser.parse_args()

    setup_logging()

    config = FCMConfig.new(
        name="demo",
        project_id=args.project_id,
        token_provider="fcm_push.auth:service_account_token",
        token_provider_args=[args.key_file],
    )
    try:
        config.validate()
        session = config.connect()
    except (ConfigError, TransportUnavailable) as exc:
        print(f"Cannot start: {exc}")
        sys.exit(1)

    notification = FCMNotification(
        token=args.token,
        notification={"title": args.title, "body": args.body},
    )

    def on_response(result: FCMNotification) -> None:
        print(f"  status={result.status}  response={result.response}")

    try:
        stream = session.request(
            config.push_headers(notification),
            config.push_payload(notification),
        )
        config.handle_end_stream(stream, notification, on_response)
    finally:
        session.close()


if __name__ == "__main__":
    main()
