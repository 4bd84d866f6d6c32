"""
Emitter definition models

Raw effect definitions as read from the XML effect files. Every property is
kept as its original string; parsing happens on demand so that the same
definition can be bound with different parser settings.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from particle.property import ParticleProperty, RangeProperty
    from particle.value_parser import ValueParser


# Property elements understood by the emitter definition format
EMITTER_PROPERTIES = frozenset({
    # Spawning
    'SpawnMinActive', 'SpawnMaxActive', 'SpawnMaxLaunched', 'SpawnRate',
    # Particle appearance
    'ParticleDuration', 'ParticleAlpha', 'ParticleScale', 'ParticleSpinAngle',
    'ParticleSpinSpeed', 'ParticleRed', 'ParticleGreen', 'ParticleBlue',
    'ParticleBrightness', 'ParticleLoops', 'ParticleStretch', 'ParticlesDontFollow',
    # Launch
    'LaunchSpeed', 'LaunchAngle', 'AlignLaunchSpin', 'RandomLaunchSpin', 'RandomStartTime',
    # Emitter shape
    'EmitterBoxX', 'EmitterBoxY', 'EmitterRadius', 'EmitterType', 'EmitterSkewX',
    'EmitterOffsetX', 'EmitterOffsetY',
    # System
    'SystemDuration', 'SystemAlpha', 'SystemLoops', 'SystemField',
    # Image
    'Image', 'ImageFrames', 'ImageRow', 'ImageCol', 'Animated', 'AnimationRate',
    # Rendering
    'Additive', 'FullScreen', 'HardwareOnly', 'ClipTop',
    # Lifecycle
    'CrossFadeDuration', 'DieIfOverloaded',
    # Collision
    'CollisionReflect', 'CollisionSpin',
})

# Properties whose double range means "moving box" rather than a random curve
RANGE_PROPERTIES = frozenset({'EmitterBoxX', 'EmitterBoxY'})

# Properties holding identifiers rather than value strings
TEXT_PROPERTIES = frozenset({'Image', 'EmitterType'})


@dataclass(frozen=True)
class FieldConfig:
    """Force field attached to an emitter (Acceleration, Friction, GroundConstraint...)"""
    field_type: str
    x: str = ""
    y: str = ""


@dataclass
class EmitterConfig:
    """One <Emitter> block"""
    name: str
    properties: Dict[str, str] = field(default_factory=dict)
    fields: List[FieldConfig] = field(default_factory=list)

    def get_raw(self, name: str, default: str = "") -> str:
        return self.properties.get(name, default)

    def get_property(self, name: str, parser: Optional['ValueParser'] = None) -> 'ParticleProperty':
        """Parse a property string into a bindable property (missing → zero result)"""
        from particle.property import ParticleProperty
        return ParticleProperty.from_string(name, self.get_raw(name), parser)

    def get_range_property(self, name: str) -> 'RangeProperty':
        """Parse an emitter-box style property (min + width tracks)"""
        from particle.property import RangeProperty
        return RangeProperty.from_string(name, self.get_raw(name))

    def fields_of_type(self, field_type: str) -> List[FieldConfig]:
        return [f for f in self.fields if f.field_type == field_type]


@dataclass
class EffectConfig:
    """A whole effect file: several emitters working together"""
    name: str
    emitters: List[EmitterConfig] = field(default_factory=list)

    def get_emitter(self, name: str) -> Optional[EmitterConfig]:
        for emitter in self.emitters:
            if emitter.name == name:
                return emitter
        return None

    @property
    def emitter_names(self) -> List[str]:
        return [e.name for e in self.emitters]
