# main.py
import sys

from blockscope.cli import CLI

def main():
    # Default to serving when launched without a command
    args = sys.argv[1:] or ["serve"]
    CLI().main(args)

if __name__ == "__main__":
    main()
