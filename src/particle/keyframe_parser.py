"""
Keyframe-sequence parser

Reads space-separated tokens left to right. Bare numbers and "a,b" pairs are
classified by a fixed list of rules with one token of lookahead:

    ".4 Linear 10,9.999999"   initial .4, reach 10 at 9.999999%, hold
    "1,95 0"                  hold 1 until 95%, decay to 0
    "1,50 0,50"               jump from 1 to 0 at 50%
    ".3 .3,39.999996 0,50"    initial .3, .3 at 40%, 0 at 50%, hold
    "0,2 1,2 4,21"            plain time,value pairs

Malformed tokens are skipped; a string without any keyframe gives None so
the dispatcher can fall through to the scalar parsers.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from models.config import ParserThresholds
from models.enums import INTERPOLATION_KEYWORDS, InterpolationMode, SequenceRule
from models.keyframe import Keyframe, ParseResult
from particle.tokens import parse_float, split_pair


def extract_interpolation(s: str) -> Tuple[str, InterpolationMode]:
    """
    Strip the first interpolation keyword found in s

    Keywords are matched as substrings in the order Linear, EaseIn, EaseOut,
    FastInOutWeak; every occurrence of the matched keyword is removed.
    """
    for mode in INTERPOLATION_KEYWORDS:
        if mode.keyword in s:
            return s.replace(mode.keyword, '').strip(), mode
    return s, InterpolationMode.UNSPECIFIED


@dataclass(frozen=True)
class Token:
    """One whitespace-separated token, pre-parsed"""
    text: str
    has_comma: bool
    pair: Optional[Tuple[float, float]] = None
    scalar: Optional[float] = None

    @classmethod
    def from_text(cls, text: str) -> 'Token':
        if ',' in text:
            return cls(text=text, has_comma=True, pair=split_pair(text))
        return cls(text=text, has_comma=False, scalar=parse_float(text))


class TokenCursor:
    """Left-to-right cursor with one token of lookahead"""

    def __init__(self, tokens: List[Token]):
        self._tokens = tokens
        self._index = 0

    @classmethod
    def from_text(cls, text: str) -> 'TokenCursor':
        return cls([Token.from_text(part) for part in text.split()])

    def done(self) -> bool:
        return self._index >= len(self._tokens)

    def current(self) -> Token:
        return self._tokens[self._index]

    def lookahead(self) -> Optional[Token]:
        nxt = self._index + 1
        return self._tokens[nxt] if nxt < len(self._tokens) else None

    def pairs_remaining(self) -> bool:
        """True if any token after the current one contains a comma"""
        return any(t.has_comma for t in self._tokens[self._index + 1:])

    def advance(self, count: int = 1) -> None:
        self._index += count


@dataclass(frozen=True)
class RuleMatch:
    """Outcome of classifying the token(s) at the cursor"""
    rule: SequenceRule
    tokens: Tuple[str, ...]
    keyframes: Tuple[Keyframe, ...] = ()
    initial_value: Optional[float] = None

    @property
    def consumed(self) -> int:
        return len(self.tokens)


@dataclass
class _ScanState:
    initial_value: Optional[float] = None
    keyframes: List[Keyframe] = field(default_factory=list)


class KeyframeSequenceParser:
    """
    Rule engine for keyframe sequences

    Example:
        parser = KeyframeSequenceParser()
        result = parser.parse("1,95 0")
        # keyframes: (0, 1), (0.95, 1), (1, 0)
    """

    def __init__(self, thresholds: Optional[ParserThresholds] = None):
        self.thresholds = thresholds or ParserThresholds()

    def scan(self, text: str) -> List[RuleMatch]:
        """Classify every token of text (keyword already stripped)"""
        cursor = TokenCursor.from_text(text)
        state = _ScanState()
        matches = []

        while not cursor.done():
            match = self._match(cursor, state)
            if match.initial_value is not None:
                state.initial_value = match.initial_value
            state.keyframes.extend(match.keyframes)
            matches.append(match)
            cursor.advance(match.consumed)

        return matches

    def parse(
        self,
        text: str,
        interpolation: InterpolationMode = InterpolationMode.UNSPECIFIED,
    ) -> Optional[ParseResult]:
        """Keyframe result for text, or None when no keyframe was produced"""
        keyframes = [kf for match in self.scan(text) for kf in match.keyframes]
        if not keyframes:
            return None
        return ParseResult(keyframes=tuple(keyframes), interpolation=interpolation)

    # === Rule dispatch ===

    def _match(self, cursor: TokenCursor, state: _ScanState) -> RuleMatch:
        token = cursor.current()
        if not token.has_comma:
            return self._match_scalar(token, state)
        if token.pair is None:
            return RuleMatch(SequenceRule.IGNORED, (token.text,))

        for rule in (
            self._match_hold_with_initial,
            self._match_trigger,
            self._match_hold_then_decay,
        ):
            match = rule(cursor, state)
            if match is not None:
                return match

        return self._match_single_pair(cursor, state)

    def _match_scalar(self, token: Token, state: _ScanState) -> RuleMatch:
        # Only the first bare number, before any keyframe, is meaningful
        if token.scalar is None or state.keyframes or state.initial_value is not None:
            return RuleMatch(SequenceRule.IGNORED, (token.text,))
        return RuleMatch(
            SequenceRule.INITIAL_VALUE,
            (token.text,),
            keyframes=(Keyframe(0.0, token.scalar),),
            initial_value=token.scalar,
        )

    # === Two-token rules ===

    def _match_hold_with_initial(self, cursor: TokenCursor, state: _ScanState) -> Optional[RuleMatch]:
        """Initial value already set: "0 10,50 0" puts 10 at 50%, then 0 at the end"""
        token, nxt = cursor.current(), cursor.lookahead()
        value, percent = token.pair
        if state.initial_value is None or percent <= self.thresholds.hold_percent_min:
            return None
        if nxt is None or nxt.has_comma or nxt.scalar is None:
            return None
        return RuleMatch(
            SequenceRule.HOLD_WITH_INITIAL,
            (token.text, nxt.text),
            keyframes=(Keyframe(percent / 100.0, value), Keyframe(1.0, nxt.scalar)),
        )

    def _match_trigger(self, cursor: TokenCursor, state: _ScanState) -> Optional[RuleMatch]:
        """Trigger: "1,50 0,50" jumps from 1 to 0 at 50%"""
        token, nxt = cursor.current(), cursor.lookahead()
        value, percent = token.pair
        if state.initial_value is not None or percent <= self.thresholds.trigger_percent_min:
            return None
        if nxt is None or not nxt.has_comma or nxt.pair is None:
            return None
        next_value, next_percent = nxt.pair
        if abs(percent - next_percent) >= self.thresholds.trigger_tolerance:
            return None
        return RuleMatch(
            SequenceRule.TRIGGER,
            (token.text, nxt.text),
            keyframes=(Keyframe(0.0, value), Keyframe(percent / 100.0, next_value)),
            initial_value=value,
        )

    def _match_hold_then_decay(self, cursor: TokenCursor, state: _ScanState) -> Optional[RuleMatch]:
        """Hold then decay: ".9,70 0" holds .9 until 70%, then moves to 0"""
        token, nxt = cursor.current(), cursor.lookahead()
        value, percent = token.pair
        if state.initial_value is not None or percent <= self.thresholds.trigger_percent_min:
            return None
        if nxt is None or nxt.has_comma or nxt.scalar is None:
            return None
        return RuleMatch(
            SequenceRule.HOLD_THEN_DECAY,
            (token.text, nxt.text),
            keyframes=(
                Keyframe(0.0, value),
                Keyframe(percent / 100.0, value),
                Keyframe(1.0, nxt.scalar),
            ),
            initial_value=value,
        )

    # === Single-token rules ===

    def _match_single_pair(self, cursor: TokenCursor, state: _ScanState) -> RuleMatch:
        token = cursor.current()
        a, b = token.pair
        th = self.thresholds

        if state.initial_value is not None and th.percent_min < b < th.percent_max:
            keyframes = [Keyframe(b / 100.0, a)]
            # The last pair holds its value through the end
            if not cursor.pairs_remaining():
                keyframes.append(Keyframe(1.0, a))
            return RuleMatch(SequenceRule.PERCENT_VALUE, (token.text,), keyframes=tuple(keyframes))

        if state.initial_value is not None and b <= th.quick_percent_max:
            return RuleMatch(
                SequenceRule.QUICK_INTERPOLATE,
                (token.text,),
                keyframes=(Keyframe(b / 100.0, a), Keyframe(1.0, a)),
            )

        return RuleMatch(SequenceRule.TIME_VALUE, (token.text,), keyframes=(Keyframe(a, b),))


def parse_keyframe_sequence(s: str, thresholds: Optional[ParserThresholds] = None) -> Optional[ParseResult]:
    """Extract the interpolation keyword, then parse the remaining tokens"""
    text, mode = extract_interpolation(s.strip())
    return KeyframeSequenceParser(thresholds).parse(text, mode)
