import logging
import sys

from .donation_tracker import main

debug = False
if len(sys.argv) > 1 and sys.argv[1] == "debug":
    logging.basicConfig(level=logging.DEBUG)
    debug = True

main(debug)
