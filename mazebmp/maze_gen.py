#!/usr/bin/env python3
"""
maze_gen.py

Image (defaults: 63x63 cells into a 512x512 bitmap, OS seeded):
  python -m mazebmp.maze_gen
  python -m mazebmp.maze_gen image --out Maze.bmp
  python -m mazebmp.maze_gen image --cells 20 --size 400 --seed 42 --out maze.bmp
  # non-square canvas: cell size comes from the width
  python -m mazebmp.maze_gen image --cells 16 --size 640,480 --out wide.bmp

Dataset (JSONL index + BMPs, duplicate mazes skipped):
  python -m mazebmp.maze_gen dataset --count 100 --cells 10 --size 200 \
    --out-dir mazes_out --index info_labels.jsonl
"""

import argparse
import json
import os
import random
import sys
from typing import Optional, Tuple

import numpy as np

from mazebmp import __version__
from mazebmp.bitmap import save_bmp
from mazebmp.cells import encode_maze, iter_passages
from mazebmp.config import (
    DEF_BASE_SEED, DEF_IMAGE_SIZE, DEF_INDEX, DEF_NUM_CELLS, DEF_OUT,
    MazeConfig,
)
from mazebmp.generator import MazeState, generate_maze
from mazebmp.render import render_maze


def print_banner():
    print("Depth-first Search Random Maze Generator")
    print(f"Version {__version__}")
    print()
    print("Usage: maze-gen [image] [--cells N] [--size W[,H]] [--seed S] [--out FILE]")
    print("       maze-gen dataset --count K [--cells N] [--size W[,H]] [--out-dir DIR]")
    print()

def parse_size(s: Optional[str]) -> Tuple[int, int]:
    if s is None:
        return DEF_IMAGE_SIZE, DEF_IMAGE_SIZE
    parts = s.split(",")
    if len(parts) == 1:
        return int(parts[0]), int(parts[0])
    w, h = parts
    return int(w), int(h)

def progress_dot(cells: int):
    print(".", end="", flush=True)


# -------------------------
# Pipeline
# -------------------------

def make_maze_image(cfg: MazeConfig, rng=None, progress=None) -> Tuple[MazeState, int, np.ndarray]:
    """Generate and rasterize one maze. Returns (state, carved cell count, pixels)."""
    cfg.validate()
    if rng is None:
        rng = random.Random(cfg.seed)
    state = MazeState(cfg.num_cells, rng)
    carved = generate_maze(state, progress=progress)
    pixels = render_maze(state.grid, cfg.num_cells, cfg.width, cfg.height)
    return state, carved, pixels

def write_maze_image(cfg: MazeConfig, rng=None) -> MazeState:
    print(f"Generating {cfg.num_cells} x {cfg.num_cells} maze into {cfg.width} x {cfg.height} bitmap")
    state, _carved, pixels = make_maze_image(cfg, rng=rng, progress=progress_dot)
    print()
    save_bmp(cfg.out, pixels)
    print(f"Saved {cfg.out}")
    return state

def generate_dataset(count: int, num_cells: int, width: int, height: int,
                     out_dir: str, index_path: str,
                     base_seed: int = DEF_BASE_SEED,
                     max_tries: Optional[int] = None):
    """
    Writes maze_00000.bmp, ... into out_dir and one JSONL record per maze.
    Seeds are base_seed + attempt; grids already seen (same signature) are skipped.
    Returns (made, unique_seen).
    """
    MazeConfig(num_cells, width, height).validate()
    if max_tries is None:
        max_tries = max(count, 1) * 100

    os.makedirs(out_dir, exist_ok=True)
    index_dir = os.path.dirname(index_path)
    if index_dir:
        os.makedirs(index_dir, exist_ok=True)

    seen = set()
    made = 0
    idx = 0
    with open(index_path, "w") as f:
        while made < count and idx < max_tries:
            seed = base_seed + idx
            idx += 1
            state = MazeState(num_cells, random.Random(seed))
            carved = generate_maze(state)
            sig = encode_maze(state.grid)
            if sig in seen:
                continue
            seen.add(sig)

            out_bmp = os.path.join(out_dir, f"maze_{made:05d}.bmp")
            save_bmp(out_bmp, render_maze(state.grid, num_cells, width, height))

            rec = {
                "index": made,
                "seed": seed,
                "cells": num_cells,
                "width": width,
                "height": height,
                "start_pos": [state.start[0], state.start[1]],
                "carved": carved,
                "passages": sum(1 for _ in iter_passages(state.grid, num_cells)),
                "signature": sig,
                "file": os.path.basename(out_bmp),
            }
            f.write(json.dumps(rec) + "\n")
            made += 1
    return made, len(seen)


# -------------------------
# CLI
# -------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Depth-first search random maze generator (24-bit BMP output).")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    # bare run: one default maze into Maze.bmp
    parser.set_defaults(cmd="image", cells=DEF_NUM_CELLS, size=None, seed=None, out=DEF_OUT)
    sub = parser.add_subparsers(dest="cmd", required=False)

    p_img = sub.add_parser("image", help="Generate a single maze bitmap.")
    p_img.add_argument("--cells", type=int, default=DEF_NUM_CELLS, help="Cells per side")
    p_img.add_argument("--size", type=str, default=None, help=f"W or W,H in px (default {DEF_IMAGE_SIZE})")
    p_img.add_argument("--seed", type=int, default=None, help="RNG seed (default: OS entropy)")
    p_img.add_argument("--out", type=str, default=DEF_OUT)

    p_ds = sub.add_parser("dataset", help="Generate a batch of unique maze bitmaps plus a JSONL index.")
    p_ds.add_argument("--count", type=int, default=100)
    p_ds.add_argument("--cells", type=int, default=DEF_NUM_CELLS)
    p_ds.add_argument("--size", type=str, default=None, help=f"W or W,H in px (default {DEF_IMAGE_SIZE})")
    p_ds.add_argument("--base-seed", type=int, default=DEF_BASE_SEED)
    p_ds.add_argument("--out-dir", type=str, default="mazes_out", help="Directory for per-maze BMPs")
    p_ds.add_argument("--index", type=str, default=DEF_INDEX, help="JSONL index path")
    return parser

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        width, height = parse_size(args.size)
    except ValueError:
        parser.error(f"--size must be W or W,H, got {args.size!r}")

    print_banner()

    try:
        if args.cmd == "image":
            cfg = MazeConfig(args.cells, width, height, seed=args.seed, out=args.out)
            try:
                cfg.validate()
            except ValueError as e:
                parser.error(str(e))
            write_maze_image(cfg)

        elif args.cmd == "dataset":
            try:
                MazeConfig(args.cells, width, height).validate()
            except ValueError as e:
                parser.error(str(e))
            made, uniq = generate_dataset(
                count=args.count,
                num_cells=args.cells,
                width=width,
                height=height,
                out_dir=args.out_dir,
                index_path=args.index,
                base_seed=args.base_seed,
            )
            print(f"Wrote {made} records to {args.index} (unique mazes: {uniq}).")
            print(f"BMPs saved to {args.out_dir}")
    except OSError as e:
        print(f"Could not write output: {e}", file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
