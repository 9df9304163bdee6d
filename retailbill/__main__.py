import sys

from retailbill.logging import configure_logging
from retailbill.scripts.render_invoice import main as render_invoice


def main() -> int:
    configure_logging()
    return render_invoice()


if __name__ == "__main__":
    sys.exit(main())
