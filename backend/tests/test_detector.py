"""Tests del detector de ánimo y de la elección del ánimo dominante."""

from types import SimpleNamespace

import numpy as np
import pytest

from moodmusic.core.emotion import deepface_detector
from moodmusic.core.emotion.deepface_detector import DeepFaceMoodDetector, select_top_mood

FRAME = np.zeros((48, 48, 3), dtype=np.uint8)


def deepface_face(emotion, face_confidence=0.95, region=None):
    return {
        'emotion': emotion,
        'dominant_emotion': max(emotion, key=emotion.get) if emotion else '',
        'region': region or {'x': 10, 'y': 12, 'w': 30, 'h': 30, 'left_eye': None},
        'face_confidence': face_confidence,
    }


@pytest.fixture
def fake_deepface(monkeypatch):
    """Sustituye DeepFace por un doble que devuelve ``state['result']``."""
    state = {'result': None, 'calls': []}
    
    def analyze(**kwargs):
        state['calls'].append(kwargs)
        result = state['result']
        if isinstance(result, Exception):
            raise result
        return result
    
    monkeypatch.setattr(deepface_detector, 'DeepFace', SimpleNamespace(analyze=analyze))
    return state


class TestSelectTopMood:
    
    def test_unique_maximum(self):
        scores = {'happy': 0.1, 'sad': 0.05, 'angry': 0.7, 'neutral': 0.15}
        assert select_top_mood(scores) == 'angry'
    
    def test_tie_goes_to_first_in_iteration_order(self):
        assert select_top_mood({'sad': 0.4, 'happy': 0.4, 'neutral': 0.2}) == 'sad'
        assert select_top_mood({'happy': 0.4, 'sad': 0.4, 'neutral': 0.2}) == 'happy'
    
    def test_tie_is_deterministic(self):
        scores = {'fearful': 0.5, 'surprised': 0.5}
        assert {select_top_mood(scores) for _ in range(20)} == {'fearful'}
    
    def test_empty_scores(self):
        assert select_top_mood({}) is None


class TestDeepFaceMoodDetector:
    
    def test_reports_top_mood_with_normalized_scores(self, fake_deepface):
        fake_deepface['result'] = [deepface_face({
            'angry': 2.0, 'disgust': 1.0, 'fear': 3.0, 'happy': 4.0,
            'sad': 5.0, 'surprise': 80.0, 'neutral': 5.0,
        })]
        
        result = DeepFaceMoodDetector().detect(FRAME)
        
        assert result['mood'] == 'surprised'
        assert result['scores']['surprised'] == pytest.approx(0.8)
        assert result['face_confidence'] == pytest.approx(0.95)
        assert result['region'] == {'x': 10, 'y': 12, 'w': 30, 'h': 30}
    
    def test_uses_light_detector_and_emotion_only(self, fake_deepface):
        fake_deepface['result'] = [deepface_face({'happy': 99.0, 'sad': 1.0})]
        
        DeepFaceMoodDetector(detector_backend='opencv').detect(FRAME)
        
        call = fake_deepface['calls'][0]
        assert call['actions'] == ['emotion']
        assert call['detector_backend'] == 'opencv'
        assert call['enforce_detection'] is True
    
    def test_no_face_returns_none(self, fake_deepface):
        fake_deepface['result'] = ValueError('Face could not be detected')
        assert DeepFaceMoodDetector().detect(FRAME) is None
    
    def test_empty_expression_scores_return_none(self, fake_deepface):
        fake_deepface['result'] = [deepface_face({})]
        assert DeepFaceMoodDetector().detect(FRAME) is None
    
    def test_low_confidence_face_is_ignored(self, fake_deepface):
        fake_deepface['result'] = [deepface_face({'happy': 90.0}, face_confidence=0.3)]
        assert DeepFaceMoodDetector(min_face_confidence=0.5).detect(FRAME) is None
    
    def test_single_face_is_the_most_confident(self, fake_deepface):
        fake_deepface['result'] = [
            deepface_face({'sad': 90.0, 'happy': 10.0}, face_confidence=0.6),
            deepface_face({'sad': 10.0, 'happy': 90.0}, face_confidence=0.99),
        ]
        assert DeepFaceMoodDetector().detect(FRAME)['mood'] == 'happy'
    
    def test_unexpected_errors_propagate(self, fake_deepface):
        fake_deepface['result'] = RuntimeError('tensorflow exploded')
        with pytest.raises(RuntimeError):
            DeepFaceMoodDetector().detect(FRAME)
