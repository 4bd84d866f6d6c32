import random

import pytest

from models.enums import LogLevel
from particle.sampler import UniformSampler
from particle.value_parser import ValueParser
from utils.logger import configure_logger


class FixedRandom:
    """random.Random stand-in that always returns the same fraction"""

    def __init__(self, value: float = 0.5):
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture(autouse=True)
def plain_logger():
    """Uncoloured INFO output for every test, restored afterwards"""
    configure_logger(LogLevel.INFO, use_colors=False)
    yield
    configure_logger(LogLevel.INFO, use_colors=True)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def sampler(rng):
    return UniformSampler(rng)


@pytest.fixture
def fixed_sampler():
    """Factory for samplers that always draw the same fraction of the range"""
    def make(fraction: float) -> UniformSampler:
        return UniformSampler(FixedRandom(fraction))
    return make


@pytest.fixture
def midpoint_sampler(fixed_sampler):
    """Always draws the middle of the range"""
    return fixed_sampler(0.5)


@pytest.fixture
def parser(midpoint_sampler):
    return ValueParser(sampler=midpoint_sampler)


@pytest.fixture
def effect_xml():
    """Two emitters in the root-less layout of the effect files"""
    return """<?xml version="1.0" encoding="utf-8"?>
<Emitter>
    <Name>AwardRay8</Name>
    <SpawnMinActive>1</SpawnMinActive>
    <Image>IMAGE_AWARDRAYS2</Image>
    <Additive>1</Additive>
    <ParticleAlpha>[0.7 0.9]</ParticleAlpha>
    <ParticleSpinSpeed>[-720 720] 0,39.999996</ParticleSpinSpeed>
    <EmitterBoxX>[-130 0] [-100 0]</EmitterBoxX>
</Emitter>
<Emitter>
    <Name>Parts</Name>
    <ParticleScale>.4 Linear 10,9.999999</ParticleScale>
    <SystemDuration>100</SystemDuration>
    <Field>
        <FieldType>Acceleration</FieldType>
        <Y>13</Y>
    </Field>
    <Field>
        <FieldType>Position</FieldType>
        <Y>0 Linear 10,50 Linear 0</Y>
    </Field>
</Emitter>
"""
