# scripts/account_info.py
# Manual check of the credentials in PIXELLETTER_EMAIL / PIXELLETTER_PASSWORD.

import os, sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)

from pixelletter import Client, PixelletterError


def main():
    client = Client.from_env()

    try:
        env = client.account_info()
    except PixelletterError as e:
        print(f"Account info failed: {e}")
        return 1

    if env.response is not None:
        print(f"Result {env.response.result.code}: {env.response.result.msg}")
    if env.customer_id:
        print(f"Customer id: {env.customer_id}")
    if env.customer_data is not None:
        d = env.customer_data
        print(f"Customer: {d.firstname or ''} {d.lastname or ''} <{d.email or ''}>")
    if env.customer_credit is not None:
        print(f"Credit: {env.customer_credit.amount or '?'} {env.customer_credit.currency}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
