"""
Effect Manager - Loads particle effect definitions

Effect files hold several top-level <Emitter> elements without a root
element. Every property stays a raw string; the manager only checks that
the value strings parse to something (suspicious ones are logged).
"""

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional

from models.emitter import EMITTER_PROPERTIES, TEXT_PROPERTIES, EffectConfig, EmitterConfig, FieldConfig
from models.enums import LogCategory
from models.errors import EffectFileNotFoundError, EffectParseError, NoEmittersError
from particle.value_parser import ValueParser, is_trivial_result
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.EFFECT)

_XML_DECLARATION = re.compile(r'^\ufeff?\s*<\?xml[^>]*\?>')


class EffectManager:
    """
    Effect definition loader with a per-path cache

    Example:
        effects = EffectManager()
        award = effects.load_file("data/particles/Award.xml")
        ray = award.get_emitter("AwardRay8")
        alpha = ray.get_property("ParticleAlpha", effects.parser)
    """

    def __init__(self, parser: Optional[ValueParser] = None):
        self.parser = parser or ValueParser()
        self._cache: Dict[str, EffectConfig] = {}
        self._by_name: Dict[str, EffectConfig] = {}

    def load_file(self, path) -> EffectConfig:
        """
        Load (or return the cached) effect from an XML file

        Raises:
            EffectFileNotFoundError: path does not exist
            EffectParseError: file is not UTF-8 or not well-formed
            NoEmittersError: file holds no <Emitter>
        """
        file_path = Path(path)
        key = str(file_path.resolve())
        if key in self._cache:
            return self._cache[key]

        if not file_path.is_file():
            raise EffectFileNotFoundError(str(path))

        try:
            text = file_path.read_bytes().decode("utf-8-sig")
        except UnicodeDecodeError as e:
            log.error("Effect file is not UTF-8", path=str(path), error=str(e))
            raise EffectParseError(str(path), f"not UTF-8 text: {e}") from e

        effect = self._parse(text, source=str(path), name=file_path.stem)
        self._cache[key] = effect
        log.info(f"Loaded effect {effect.name}", path=str(path), emitters=len(effect.emitters))
        return effect

    def load_string(self, text: str, source: str = "<string>") -> EffectConfig:
        """Parse an effect from XML text; not cached by path, but reachable by name"""
        effect = self._parse(text, source=source, name=Path(source).stem or source)
        log.info(f"Loaded effect {effect.name}", emitters=len(effect.emitters))
        return effect

    def get_effect(self, name: str) -> Optional[EffectConfig]:
        return self._by_name.get(name)

    @property
    def effect_names(self) -> List[str]:
        return list(self._by_name.keys())

    def clear(self):
        self._cache.clear()
        self._by_name.clear()

    # ===== Parsing =====

    def _parse(self, text: str, source: str, name: str) -> EffectConfig:
        body = _XML_DECLARATION.sub('', text, count=1)
        try:
            root = ET.fromstring(f"<ParticleConfig>{body}</ParticleConfig>")
        except ET.ParseError as e:
            log.error("Malformed effect XML", source=source, error=str(e))
            raise EffectParseError(source, str(e)) from e

        emitters = [self._parse_emitter(element, source) for element in root.findall('Emitter')]
        if not emitters:
            raise NoEmittersError(source)

        effect = EffectConfig(name=name, emitters=emitters)
        self._by_name[name] = effect
        return effect

    def _parse_emitter(self, element: ET.Element, source: str) -> EmitterConfig:
        emitter = EmitterConfig(name=_text(element.find('Name')))

        for child in element:
            tag = child.tag
            if tag == 'Name':
                continue
            if tag == 'Field':
                emitter.fields.append(FieldConfig(
                    field_type=_text(child.find('FieldType')),
                    x=_text(child.find('X')),
                    y=_text(child.find('Y')),
                ))
                continue

            if tag not in EMITTER_PROPERTIES:
                log.warn(f"Unknown emitter element <{tag}>", source=source, emitter=emitter.name)
            emitter.properties[tag] = _text(child)

        self._check_values(emitter, source)
        return emitter

    def _check_values(self, emitter: EmitterConfig, source: str):
        """Warn about non-empty value strings that parse to nothing"""
        values = [
            (tag, raw) for tag, raw in emitter.properties.items()
            if tag in EMITTER_PROPERTIES and tag not in TEXT_PROPERTIES
        ]
        for f in emitter.fields:
            values.append((f"Field[{f.field_type}].X", f.x))
            values.append((f"Field[{f.field_type}].Y", f.y))

        for tag, raw in values:
            if raw and is_trivial_result(raw, self.parser.parse(raw)):
                log.warn(
                    f"Value of {tag} parsed to zero",
                    source=source,
                    emitter=emitter.name,
                    raw=raw,
                )


def _text(element: Optional[ET.Element]) -> str:
    if element is None or element.text is None:
        return ""
    return element.text.strip()
