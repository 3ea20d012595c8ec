# Ragcontext – Grounding context retrieval for document Q&A
# Copyright (c) 2026 4rce.com Digital Technologies GmbH.
# Use of this software is governed by the Business Source License 1.1. See LICENSE.md.

"""
Entry point: python -m ragcontext {ingest,query,serve}

  ingest [SOURCE_DIR] [--output PATH]   rebuild the chunk store
  query QUESTION [--json]               print the retrieved context
  serve [--host H] [--port P]           run the HTTP retrieval API
"""
import argparse
import json
import sys

from .config import Config
from .embeddings import Embedder
from .errors import ModelUnavailable
from .health import HealthTracker
from .ingest import build_store
from .retriever import Retriever


def cmd_ingest(config: Config, args) -> int:
    embedder = Embedder(config)
    print(f"Ingesting {args.source or config.data_path} ...")
    try:
        result = build_store(config, embedder, source_dir=args.source, output_path=args.output)
    except ModelUnavailable as e:
        print(f"Error: {e}")
        return 1
    if result["status"] != "success":
        print(f"Error: {result['message']}")
        return 1
    print(f"Done: {result['chunks_total']} chunks from {result['files_indexed']} files "
          f"({result['files_skipped']} skipped)")
    return 0


def cmd_query(config: Config, args) -> int:
    retriever = Retriever(config, embedder=Embedder(config))
    try:
        result = retriever.get_context(args.question)
    except ModelUnavailable as e:
        print(f"Error: {e}")
        return 1
    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False))
    elif result.used_any_context:
        print(result.context)
    else:
        print("(no relevant context)")
    return 0


def cmd_serve(config: Config, args) -> int:
    import uvicorn

    from .web import create_web_app

    health = HealthTracker()
    retriever = Retriever(config, embedder=Embedder(config), health=health)
    app = create_web_app(config, retriever, health)
    host = args.host or config.web_host
    port = args.port or config.web_port
    print(f"Retrieval API running on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="warning")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ragcontext", description="Document retrieval for grounded answers")
    sub = p.add_subparsers(dest="cmd", required=True)

    pi = sub.add_parser("ingest", help="Build the chunk store from a directory")
    pi.add_argument("source", nargs="?", default=None, help="Source directory (default: RAG_DATA_PATH)")
    pi.add_argument("--output", default=None, help="Store file (default: RAG_STORE_PATH)")
    pi.set_defaults(func=cmd_ingest)

    pq = sub.add_parser("query", help="Retrieve context for a question")
    pq.add_argument("question")
    pq.add_argument("--json", action="store_true")
    pq.set_defaults(func=cmd_query)

    ps = sub.add_parser("serve", help="Run the HTTP retrieval API")
    ps.add_argument("--host", default=None)
    ps.add_argument("--port", type=int, default=None)
    ps.set_defaults(func=cmd_serve)

    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = Config.load()
    return args.func(config, args)


if __name__ == "__main__":
    sys.exit(main())
