#!/usr/bin/env python3
"""
objstore CLI

  objstore serve - Run the HTTP object store
  objstore put - Write an object to a repository
  objstore get - Read an object
  objstore delete - Delete an object
  objstore hash - Print the oid of a file without storing it

Usage:
  objstore serve [--config <file>] [--host <host>] [--port <port>] [-v]
  objstore put <repository> <file|-> [--url <url>]
  objstore get <repository> <oid> [-o <file>] [--url <url>]
  objstore delete <repository> <oid> [--url <url>]
  objstore hash <file|-> [--algorithm <name>]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .client import ClientError, ObjectClient
from .config import ServerConfig
from .errors import ConfigError
from .hasher import DEFAULT_ALGORITHM, check_algorithm, identify

DEFAULT_URL = "http://localhost:8282"


def read_input(source: str) -> bytes:
    """Read bytes from a file path, or stdin for '-'."""
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def load_config(args) -> ServerConfig:
    """Build server config from defaults, optional YAML file and flags."""
    config = ServerConfig.from_file(Path(args.config)) if args.config else ServerConfig()
    return config.merged(
        host=args.host,
        port=args.port,
        algorithm=args.algorithm,
        log_level="DEBUG" if args.verbose else None,
    )


def cmd_serve(args):
    """Run the server until interrupted."""
    from .server import ObjectServer

    config = load_config(args)
    logging.basicConfig(
        level=config.log_level_number,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    server = ObjectServer(config)
    print(f"Object store running on {server.url}")
    server.start()


def cmd_put(args):
    """Write an object and print its descriptor."""
    client = ObjectClient(args.url)
    info = client.put(args.repository, read_input(args.source))
    print(json.dumps(info.to_dict()))


def cmd_get(args):
    """Read an object to a file or stdout."""
    client = ObjectClient(args.url)
    data = client.get(args.repository, args.oid)
    if args.output:
        Path(args.output).write_bytes(data)
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.flush()


def cmd_delete(args):
    """Delete an object."""
    client = ObjectClient(args.url)
    client.delete(args.repository, args.oid)
    print(f"Deleted {args.repository}/{args.oid}")


def cmd_hash(args):
    """Print the oid the server would assign."""
    algorithm = check_algorithm(args.algorithm)
    print(identify(read_input(args.source), algorithm))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="objstore",
        description="In-memory content-addressed object store",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP server")
    serve_parser.add_argument("--config", help="YAML config file")
    serve_parser.add_argument("--host", help="Host to bind to")
    serve_parser.add_argument("--port", type=int, help="Port to bind to")
    serve_parser.add_argument("--algorithm", help="Hash algorithm for oids")
    serve_parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    # put command
    put_parser = subparsers.add_parser("put", help="Write an object")
    put_parser.add_argument("repository", help="Repository name")
    put_parser.add_argument("source", help="File to upload, or - for stdin")
    put_parser.add_argument("--url", default=DEFAULT_URL, help="Server URL")

    # get command
    get_parser = subparsers.add_parser("get", help="Read an object")
    get_parser.add_argument("repository", help="Repository name")
    get_parser.add_argument("oid", help="Object id")
    get_parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    get_parser.add_argument("--url", default=DEFAULT_URL, help="Server URL")

    # delete command
    delete_parser = subparsers.add_parser("delete", help="Delete an object")
    delete_parser.add_argument("repository", help="Repository name")
    delete_parser.add_argument("oid", help="Object id")
    delete_parser.add_argument("--url", default=DEFAULT_URL, help="Server URL")

    # hash command
    hash_parser = subparsers.add_parser("hash", help="Compute an oid locally")
    hash_parser.add_argument("source", help="File to hash, or - for stdin")
    hash_parser.add_argument("--algorithm", default=DEFAULT_ALGORITHM, help="Hash algorithm")

    return parser


COMMANDS = {
    "serve": cmd_serve,
    "put": cmd_put,
    "get": cmd_get,
    "delete": cmd_delete,
    "hash": cmd_hash,
}


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)

    try:
        command(args)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        sys.exit(2)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (ClientError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
