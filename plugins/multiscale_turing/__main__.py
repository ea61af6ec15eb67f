"""
Multi-Scale Turing Patterns - Entry Point

Usage:
    python -m multiscale_turing [options]

Options:
    --configfile PATH   read width, height and scales from a JSON file
    --preset NAME       use a named scale preset (see --list)
    --size WxH          image size when no config file is given (600x600)
    --model gray|rgb    colour model (default: gray)
    --saveNth N         write a PNG every Nth iteration (default: 1)
    --iterations N      stop after N iterations (default: 0, run forever)
    --outdir DIR        directory for PNG files (default: .)
    --seed N            seed for the initial noise (default: clock ns)
    --writeconfig PATH  save the effective configuration as JSON
    --profilecpu PATH   write a cProfile CPU profile on exit
    --list              list presets and exit

Examples:
    python -m multiscale_turing
    python -m multiscale_turing --size 256x256 --model rgb --saveNth 5
    python -m multiscale_turing --configfile scales.json --iterations 20

Runs until interrupted (Ctrl-C) unless --iterations is given.
"""

import cProfile
import os
import sys
import time

from .config import ConfigurationError, default_config, read_config, write_config
from .engine import MultiScaleTuring
from .images import IMAGE_CLASSES
from .output import frame_filename, write_png
from .presets import get_preset, list_presets

_VALUE_FLAGS = {
    "--configfile", "--preset", "--size", "--model", "--saveNth",
    "--iterations", "--outdir", "--seed", "--writeconfig", "--profilecpu",
}


class UsageError(Exception):
    pass


def _parse_int(flag, value, minimum):
    try:
        n = int(value)
    except ValueError:
        raise UsageError(f"{flag} expects an integer, got {value!r}") from None
    if n < minimum:
        raise UsageError(f"{flag} must be >= {minimum}, got {n}")
    return n


def parse_args(argv):
    """Parse argv into an options dict. Raises UsageError."""
    opts = {
        "configfile": None,
        "preset": "default",
        "size": None,
        "model": "gray",
        "saveNth": 1,
        "iterations": 0,
        "outdir": ".",
        "seed": None,
        "writeconfig": None,
        "profilecpu": None,
        "list": False,
        "help": False,
    }

    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg in _VALUE_FLAGS:
            if i + 1 >= len(argv):
                raise UsageError(f"{arg} expects a value")
            value = argv[i + 1]
            key = arg[2:]
            if key == "size":
                parts = value.lower().split("x")
                if len(parts) != 2:
                    raise UsageError(f"--size expects WxH, got {value!r}")
                opts["size"] = (_parse_int(arg, parts[0], 1),
                                _parse_int(arg, parts[1], 1))
            elif key == "model":
                if value not in IMAGE_CLASSES:
                    raise UsageError(
                        f"--model must be one of {', '.join(IMAGE_CLASSES)}, got {value!r}")
                opts["model"] = value
            elif key == "preset":
                if get_preset(value) is None:
                    raise UsageError(f"Unknown preset: {value}")
                opts["preset"] = value
            elif key == "saveNth":
                opts["saveNth"] = _parse_int(arg, value, 1)
            elif key == "iterations":
                opts["iterations"] = _parse_int(arg, value, 0)
            elif key == "seed":
                opts["seed"] = _parse_int(arg, value, 0)
            else:
                opts[key] = value
            i += 2
        elif arg == "--list":
            opts["list"] = True
            i += 1
        elif arg in ("--help", "-h"):
            opts["help"] = True
            i += 1
        else:
            raise UsageError(f"Unknown argument: {arg}")
    return opts


def build_config(opts):
    """Config file wins; otherwise preset scales at the requested size."""
    if opts["configfile"]:
        return read_config(opts["configfile"])
    cfg = default_config()
    if opts["size"]:
        cfg.width, cfg.height = opts["size"]
    cfg.scales = list(get_preset(opts["preset"])["scales"])
    return cfg.validate()


def generate_images(image, save_nth=1, iterations=0, outdir="."):
    """Iterate the image, saving every save_nth frame. iterations=0 runs forever."""
    i = 1
    while iterations == 0 or i <= iterations:
        print(f"iteration {i:3d}...")
        image.next_iteration()
        if i % save_nth == 0:
            path = os.path.join(outdir, frame_filename(i))
            write_png(path, image.pixmap())
        i += 1
    return i - 1


def run(opts):
    cfg = build_config(opts)
    print(f"using config:\n{cfg.to_json()}")
    print()
    if opts["writeconfig"]:
        write_config(cfg, opts["writeconfig"])
        print(f"config saved: {opts['writeconfig']}")

    seed = opts["seed"] if opts["seed"] is not None else time.time_ns()
    print(f"using seed: {seed}")

    os.makedirs(opts["outdir"], exist_ok=True)
    engine = MultiScaleTuring.from_config(cfg, seed=seed)
    image = IMAGE_CLASSES[opts["model"]](engine)

    generate_images(image, save_nth=opts["saveNth"],
                    iterations=opts["iterations"], outdir=opts["outdir"])


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]

    try:
        opts = parse_args(argv)
    except UsageError as e:
        print(e, file=sys.stderr)
        print("Use --help for usage", file=sys.stderr)
        return 2

    if opts["help"]:
        print(__doc__)
        return 0
    if opts["list"]:
        print("\nAvailable presets:")
        for key, name, desc in list_presets():
            print(f"  {key:12s} {name:12s} {desc}")
        print()
        return 0

    profiler = None
    if opts["profilecpu"]:
        profiler = cProfile.Profile()
        profiler.enable()

    try:
        run(opts)
    except KeyboardInterrupt:
        print("\nstopped")
    except (ConfigurationError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        if profiler is not None:
            profiler.disable()
            profiler.dump_stats(opts["profilecpu"])
            print(f"cpu profile saved: {opts['profilecpu']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
