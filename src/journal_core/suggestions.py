"""
Suggestion Engine.

Turns one mood analysis into up to five activity suggestions by combining a
mood pool, an energy-band pool, a sentiment-band pool and one random
general wellness tip, then shuffling the result.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .models import MoodAnalysis, MoodType

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5
LOW_ENERGY_THRESHOLD = 3.0
HIGH_ENERGY_THRESHOLD = 7.0
NEGATIVE_SENTIMENT_THRESHOLD = -0.3
POSITIVE_SENTIMENT_THRESHOLD = 0.3


class SuggestionCategory(str, Enum):
    """Kind of activity a suggestion proposes."""

    WELLNESS = "wellness"
    ACTIVITY = "activity"
    RELAXATION = "relaxation"
    SOCIAL = "social"
    MINDFULNESS = "mindfulness"
    CREATIVE = "creative"
    SELF_CARE = "self_care"


class Palette:
    """Hex colors used to tint suggestion cards."""

    PINK = "#E8B4A8"
    BLUE = "#A8C5D6"
    GREEN = "#B5C9A8"
    YELLOW = "#F4E4C1"
    PURPLE = "#C5B3CC"
    PEACH = "#E8C5B3"


@dataclass(frozen=True)
class Suggestion:
    """A single actionable suggestion."""

    icon: str
    title: str
    description: str
    category: SuggestionCategory
    color: str

    def to_dict(self) -> dict:
        return {
            "icon": self.icon,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "color": self.color,
        }


def _s(icon, title, description, category, color) -> Suggestion:
    return Suggestion(icon, title, description, category, color)


MOOD_SUGGESTIONS: Dict[MoodType, Tuple[Suggestion, ...]] = {
    MoodType.HAPPY: (
        _s("sparkles", "Hold On to This Energy",
           "Write down what made today good so you can come back to it tomorrow",
           SuggestionCategory.MINDFULNESS, Palette.YELLOW),
        _s("figure.walk", "Get Outside",
           "Enjoy the day with a short walk", SuggestionCategory.ACTIVITY, Palette.GREEN),
        _s("person.2.fill", "Share It",
           "Call someone close and share the good news", SuggestionCategory.SOCIAL, Palette.PINK),
    ),
    MoodType.CALM: (
        _s("book.fill", "Read a Book",
           "Use the quiet moment to open a book you love", SuggestionCategory.RELAXATION, Palette.BLUE),
        _s("paintbrush.fill", "Make Something",
           "Draw, write or put on some music", SuggestionCategory.CREATIVE, Palette.PURPLE),
        _s("leaf.fill", "Meditate",
           "Try a ten minute breathing exercise", SuggestionCategory.MINDFULNESS, Palette.GREEN),
    ),
    MoodType.SAD: (
        _s("heart.fill", "Be Gentle With Yourself",
           "Feeling sad is normal, let the feeling be there", SuggestionCategory.SELF_CARE, Palette.PINK),
        _s("phone.fill", "Talk to Someone",
           "Reach out to someone you trust, you are not alone", SuggestionCategory.SOCIAL, Palette.BLUE),
        _s("music.note", "Play Your Favourite Music",
           "Put on the song that always lifts you", SuggestionCategory.RELAXATION, Palette.PURPLE),
        _s("cup.and.saucer.fill", "Make a Warm Drink",
           "Brew some tea or coffee and slow down", SuggestionCategory.SELF_CARE, Palette.PEACH),
    ),
    MoodType.ANXIOUS: (
        _s("wind", "Breathe Deeply",
           "4-7-8 technique: in for 4, hold for 7, out for 8", SuggestionCategory.MINDFULNESS, Palette.BLUE),
        _s("figure.mind.and.body", "Yoga or Guided Meditation",
           "Follow a ten minute guided session", SuggestionCategory.WELLNESS, Palette.PURPLE),
        _s("pencil.and.list.clipboard", "Write Your Worries Down",
           "Get what is on your mind onto paper and sort it", SuggestionCategory.MINDFULNESS, Palette.PINK),
        _s("tree.fill", "Spend Time in Nature",
           "Green spaces are calming, head to a park", SuggestionCategory.ACTIVITY, Palette.GREEN),
    ),
    MoodType.ENERGETIC: (
        _s("figure.run", "Work Out",
           "Put the energy to use with a 20 minute run", SuggestionCategory.ACTIVITY, Palette.GREEN),
        _s("checkmark.circle.fill", "Tackle the Backlog",
           "Motivation is high, finish that task you keep postponing", SuggestionCategory.ACTIVITY, Palette.YELLOW),
        _s("star.circle.fill", "Try Something New",
           "Practise a hobby or learn a new skill", SuggestionCategory.CREATIVE, Palette.PEACH),
    ),
    MoodType.PEACEFUL: (
        _s("moon.stars.fill", "Mindful Moment",
           "Notice this calm and feel grateful for it", SuggestionCategory.MINDFULNESS, Palette.BLUE),
        _s("book.closed.fill", "Keep a Journal",
           "Record this peace so you can remember it", SuggestionCategory.MINDFULNESS, Palette.PURPLE),
        _s("sun.max.fill", "Enjoy the Outdoors",
           "Step outside and feel the sun", SuggestionCategory.RELAXATION, Palette.YELLOW),
    ),
    MoodType.EXCITED: (
        _s("party.popper.fill", "Share the Excitement",
           "Tell the people you love the good news", SuggestionCategory.SOCIAL, Palette.PINK),
        _s("camera.fill", "Capture the Moment",
           "Take a photo to remember today", SuggestionCategory.CREATIVE, Palette.YELLOW),
        _s("gift.fill", "Reward Yourself",
           "You earned a celebration", SuggestionCategory.SELF_CARE, Palette.PEACH),
    ),
    MoodType.NEUTRAL: (
        _s("figure.walk.motion", "Move a Little",
           "A short walk gives you a lift", SuggestionCategory.ACTIVITY, Palette.GREEN),
        _s("cup.and.saucer", "Take a Break",
           "A coffee break clears the mind", SuggestionCategory.SELF_CARE, Palette.PEACH),
    ),
}

LOW_ENERGY_SUGGESTIONS: Tuple[Suggestion, ...] = (
    _s("bed.double.fill", "Rest",
       "Your energy is low, give yourself time to recharge", SuggestionCategory.WELLNESS, Palette.BLUE),
    _s("powersleep", "Go to Bed Early",
       "An early night means more energy tomorrow", SuggestionCategory.WELLNESS, Palette.PURPLE),
    _s("drop.fill", "Drink Some Water",
       "Dehydration feels like tiredness, have a glass of water", SuggestionCategory.WELLNESS, Palette.BLUE),
)

HIGH_ENERGY_SUGGESTIONS: Tuple[Suggestion, ...] = (
    _s("figure.strengthtraining.traditional", "Use Your Energy",
       "Do some exercise or an active chore", SuggestionCategory.ACTIVITY, Palette.GREEN),
    _s("lightbulb.fill", "Creative Projects",
       "Channel the energy into something creative", SuggestionCategory.CREATIVE, Palette.YELLOW),
)

NEGATIVE_SENTIMENT_SUGGESTIONS: Tuple[Suggestion, ...] = (
    _s("heart.circle.fill", "Look After Yourself",
       "It has been a hard day, be kind to yourself", SuggestionCategory.SELF_CARE, Palette.PINK),
    _s("sun.haze.fill", "Find Three Good Things",
       "Name three things you are grateful for, small ones count", SuggestionCategory.MINDFULNESS, Palette.YELLOW),
)

POSITIVE_SENTIMENT_SUGGESTIONS: Tuple[Suggestion, ...] = (
    _s("star.fill", "Keep the Momentum",
       "Note what you did today so you can do it again", SuggestionCategory.MINDFULNESS, Palette.YELLOW),
)

GENERAL_WELLNESS_SUGGESTIONS: Tuple[Suggestion, ...] = (
    _s("waterbottle.fill", "Stay Hydrated",
       "Aim for at least eight glasses of water a day", SuggestionCategory.WELLNESS, Palette.BLUE),
    _s("fork.knife", "Eat Well",
       "Balanced meals have a real effect on mood", SuggestionCategory.WELLNESS, Palette.GREEN),
    _s("moon.zzz.fill", "Sleep Routine",
       "Go to bed and get up at the same time every day", SuggestionCategory.WELLNESS, Palette.PURPLE),
)


def energy_suggestions(energy: float) -> Tuple[Suggestion, ...]:
    """Band pool for energy on the 0-10 scale."""
    if energy < LOW_ENERGY_THRESHOLD:
        return LOW_ENERGY_SUGGESTIONS
    if energy > HIGH_ENERGY_THRESHOLD:
        return HIGH_ENERGY_SUGGESTIONS
    return ()


def sentiment_suggestions(sentiment: float) -> Tuple[Suggestion, ...]:
    if sentiment < NEGATIVE_SENTIMENT_THRESHOLD:
        return NEGATIVE_SENTIMENT_SUGGESTIONS
    if sentiment > POSITIVE_SENTIMENT_THRESHOLD:
        return POSITIVE_SENTIMENT_SUGGESTIONS
    return ()


class SuggestionEngine:
    """
    Generates mood-based suggestions.

    The random source is injectable so tests can seed it; by default a fresh
    unseeded ``random.Random`` is used.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def eligible_suggestions(
        self, mood: MoodType, energy: float, sentiment: float
    ) -> List[Suggestion]:
        """Deterministic part of the selection: mood, energy and sentiment pools."""
        mood = MoodType(mood)
        return [
            *MOOD_SUGGESTIONS[mood],
            *energy_suggestions(energy),
            *sentiment_suggestions(sentiment),
        ]

    def generate_suggestions(
        self, mood: MoodType, energy: float, sentiment: float
    ) -> List[Suggestion]:
        """
        Build a shuffled list of at most five suggestions.

        Args:
            mood: Detected mood
            energy: Energy on the 0-10 scale
            sentiment: Sentiment in [-1, 1]

        Returns:
            Between one and five suggestions
        """
        suggestions = self.eligible_suggestions(mood, energy, sentiment)
        suggestions.append(self.rng.choice(GENERAL_WELLNESS_SUGGESTIONS))
        self.rng.shuffle(suggestions)
        result = suggestions[:MAX_SUGGESTIONS]

        logger.debug(
            f"[SUGGEST] mood={MoodType(mood).value} energy={energy:.1f} "
            f"sentiment={sentiment:.2f} -> {[s.title for s in result]}"
        )
        return result

    def suggestions_for(self, analysis: MoodAnalysis) -> List[Suggestion]:
        """Suggestions for a stored analysis (energy rescaled to 0-10)."""
        return self.generate_suggestions(
            analysis.mood, analysis.energy * 10, analysis.sentiment
        )
