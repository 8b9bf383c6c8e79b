"""Tests de normalización de etiquetas y scores."""

import pytest

from moodmusic.core.emotion.schema import (
    MOOD_LABELS, normalize_mood, normalize_scores, is_valid_mood, get_all_moods
)


@pytest.mark.parametrize('raw, expected', [
    ('happy', 'happy'),
    ('surprise', 'surprised'),
    ('fear', 'fearful'),
    ('disgust', 'disgusted'),
    ('  Sad ', 'sad'),
    ('anger', 'angry'),
])
def test_normalize_mood(raw, expected):
    assert normalize_mood(raw) == expected


@pytest.mark.parametrize('raw', ['confused', '', None, 42])
def test_normalize_mood_rejects_unknown(raw):
    assert normalize_mood(raw) is None


def test_normalize_scores_converts_percentages_and_keeps_order():
    raw = {
        'angry': 1.0, 'disgust': 0.5, 'fear': 2.5, 'happy': 90.0,
        'sad': 1.0, 'surprise': 3.0, 'neutral': 2.0,
    }
    scores = normalize_scores(raw)
    
    assert list(scores) == ['angry', 'disgusted', 'fearful', 'happy', 'sad', 'surprised', 'neutral']
    assert scores['happy'] == pytest.approx(0.9)
    assert scores['disgusted'] == pytest.approx(0.005)
    assert all(0.0 <= v <= 1.0 for v in scores.values())


def test_normalize_scores_clamps_and_drops_unknown():
    scores = normalize_scores({'happy': 130.0, 'sad': -4.0, 'contempt': 50.0})
    assert scores == {'happy': 1.0, 'sad': 0.0}


def test_normalize_scores_empty():
    assert normalize_scores(None) == {}
    assert normalize_scores({}) == {}


def test_valid_moods():
    assert all(is_valid_mood(m) for m in MOOD_LABELS)
    assert not is_valid_mood('surprise')
    assert get_all_moods() == MOOD_LABELS
    assert get_all_moods() is not MOOD_LABELS
