# scripts/send_test_letter.py
# Sends one text letter in test mode. Usage: send_test_letter.py <DE|AT|...>

import os, sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)

from pixelletter import Client, Letter, PixelletterError, TextContent


def main():
    destination = sys.argv[1] if len(sys.argv) > 1 else "DE"
    client = Client.from_env(testing_mode=True)

    try:
        msg = (
            client.order()
            .letter(Letter(destination=destination))
            .text(TextContent(
                address="Max Mustermann\nMusterstr. 1\n12345 Musterstadt",
                message="Testbrief",
                return_address="Absender, Str. 1, 12345 Ort",
            ))
            .submit()
        )
    except PixelletterError as e:
        print(f"Order failed: {e}")
        return 1

    print(f"Gateway: {msg}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
