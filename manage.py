import argparse
import subprocess
import sys

import utils_config

def run_command(command, cwd=None):
    try:
        subprocess.check_call(command, cwd=cwd)
    except subprocess.CalledProcessError as e:
        print(f"Error running command: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nOperation cancelled.")
        sys.exit(0)

def install(args):
    print("Installing dependencies...")
    target = ".[test]" if args.test else "."
    run_command([sys.executable, "-m", "pip", "install", "-e", target])

def start(args):
    host = args.host or utils_config.HOST
    port = args.port or utils_config.PORT
    print(f"Starting pH Strip Analyzer on http://{host}:{port}/ ...")
    cmd = [sys.executable, "-m", "uvicorn", "app:app", "--host", host, "--port", str(port)]
    if args.reload:
        cmd.append("--reload")
    run_command(cmd)

def main():
    parser = argparse.ArgumentParser(description="pH Strip Analyzer Project Manager")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Install
    parser_install = subparsers.add_parser("install", help="Install the project in editable mode")
    parser_install.add_argument("--test", action="store_true", help="Include test dependencies")
    parser_install.set_defaults(func=install)

    # Start
    parser_start = subparsers.add_parser("start", help="Start the uvicorn server")
    parser_start.add_argument("--host", help=f"Bind address (default {utils_config.HOST})")
    parser_start.add_argument("--port", type=int, help=f"Port (default {utils_config.PORT})")
    parser_start.add_argument("--reload", action="store_true", help="Reload on source changes")
    parser_start.set_defaults(func=start)

    args = parser.parse_args()

    if args.command:
        args.func(args)
    else:
        parser.print_help()

if __name__ == "__main__":
    main()
