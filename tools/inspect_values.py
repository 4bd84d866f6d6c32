#!/usr/bin/env python3
"""
Particle Value Inspector

Shows how value strings and effect files are understood by the parser.

Usage:
    python tools/inspect_values.py value "[0.7 0.9]" ".4 Linear 10,9.999999"
    python tools/inspect_values.py value "1,95 0" --sample-at 0 0.5 0.975 1
    python tools/inspect_values.py value "[-720 720] 0,39.999996" --json --seed 7
    python tools/inspect_values.py effect data/particles/Award.xml
"""

import json
import sys
from pathlib import Path
from typing import List, Optional

from managers import ConfigManager, EffectManager
from models.emitter import RANGE_PROPERTIES, TEXT_PROPERTIES, EmitterConfig
from models.enums import LogLevel
from models.errors import DomainError
from models.keyframe import as_keyframes
from particle.property import ParticleProperty, RangeProperty
from particle.sampler import UniformSampler
from particle.value_parser import ValueParser
from utils.logger import configure_logger
from utils.serialization import Serializer, format_number


def inspect_value(parser: ValueParser, sampler: UniformSampler, raw: str, sample_at: List[float]) -> dict:
    """Parse one string and collect everything worth showing about it"""
    value_format, result = parser.classify(raw)
    info = {
        "raw": raw,
        "format": value_format.name,
        "canonical": Serializer.to_value_string(result),
        **Serializer.to_dict(result),
    }
    if sample_at:
        curve = ParticleProperty(name="value", raw=raw, result=result).resolve_curve(sampler)
        info["samples"] = [[t, curve.value_at(t)] for t in sample_at]
    return info


def print_value(info: dict):
    print(f"{info['raw']!r}")
    print(f"  format:        {info['format']}")
    print(f"  range:         [{format_number(info['min'])} {format_number(info['max'])}]")
    if info["keyframes"]:
        frames = " ".join(Serializer.keyframe_to_str(kf) for kf in as_keyframes(info["keyframes"]))
        print(f"  keyframes:     {frames}")
        print(f"  interpolation: {info['interpolation'] or '-'}")
    print(f"  canonical:     {info['canonical']!r}")
    for t, v in info.get("samples", []):
        print(f"  t={format_number(t):<8} {v:.6g}")


def print_emitter(emitter: EmitterConfig, parser: ValueParser):
    print(f"Emitter {emitter.name or '(unnamed)'}")
    for tag, raw in emitter.properties.items():
        if tag in TEXT_PROPERTIES:
            print(f"  {tag:<20} {raw}")
        elif tag in RANGE_PROPERTIES:
            prop = RangeProperty.from_string(tag, raw)
            print(
                f"  {tag:<20} {raw!r:<28} min {format_number(prop.min_at(0))}→{format_number(prop.min_at(1))}"
                f", width {format_number(prop.width_at(0))}→{format_number(prop.width_at(1))}"
            )
        else:
            prop = emitter.get_property(tag, parser)
            print(f"  {tag:<20} {raw!r:<28} {Serializer.to_value_string(prop.result)!r}")
    for f in emitter.fields:
        x = Serializer.to_value_string(parser.parse(f.x))
        y = Serializer.to_value_string(parser.parse(f.y))
        print(f"  Field {f.field_type:<14} X={x!r} Y={y!r}")


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line interface for the value inspector."""
    import argparse

    parser = argparse.ArgumentParser(description="Inspect particle value strings and effect files")
    parser.add_argument("--config", default=None, help="Parser YAML config (default: src/config/parser.yaml)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for range sampling")
    parser.add_argument("--debug", action="store_true", help="Show DEBUG logs")

    sub = parser.add_subparsers(dest="command", required=True)

    value_cmd = sub.add_parser("value", help="Parse value strings")
    value_cmd.add_argument("values", nargs="+", help="Value strings to parse")
    value_cmd.add_argument("--sample-at", type=float, nargs="+", default=[], metavar="T",
                           help="Evaluate the resolved curve at these times")
    value_cmd.add_argument("--json", action="store_true", help="Print JSON instead of text")

    effect_cmd = sub.add_parser("effect", help="Parse every property of an effect XML file")
    effect_cmd.add_argument("path", help="Effect XML file")

    args = parser.parse_args(argv)

    # Config chatter stays out of the inspected output
    configure_logger(LogLevel.DEBUG if args.debug else LogLevel.WARN)

    try:
        if args.config:
            config = ConfigManager(config_path=Path(args.config).resolve())
        else:
            config = ConfigManager()
        config.load()
        config.apply_logging()
        if args.debug:
            configure_logger(LogLevel.DEBUG, config.settings.log_colors)

        sampler = UniformSampler.seeded(args.seed) if args.seed is not None else config.create_sampler()
        value_parser = config.create_parser(sampler)

        if args.command == "value":
            infos = [inspect_value(value_parser, sampler, raw, args.sample_at) for raw in args.values]
            if args.json:
                print(json.dumps(infos, indent=2))
            else:
                for info in infos:
                    print_value(info)
            return 0

        effect = EffectManager(value_parser).load_file(args.path)
        print(f"Effect {effect.name}: {len(effect.emitters)} emitter(s)\n")
        for emitter in effect.emitters:
            print_emitter(emitter, value_parser)
            print()
        return 0

    except DomainError as e:
        print(f"❌ {e.code}: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
