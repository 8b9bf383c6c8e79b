"""
Fixtures compartidas: pipeline con dobles de prueba y cliente Flask.
"""

import pytest

from moodmusic.app import create_app
from moodmusic.core.music.youtube import MusicFetchError
from moodmusic.core.pipeline.mood_pipeline import MoodMusicPipeline
from moodmusic.core.utils.metrics import PerformanceMetrics

from tests.fakes import FakeCamera, FakeLoader, FakeDetector, FakeFetcher, mood_result


@pytest.fixture
def camera():
    return FakeCamera()


@pytest.fixture
def loader():
    loader = FakeLoader()
    loader.start()
    return loader


@pytest.fixture
def detector():
    return FakeDetector(mood_result('happy'))


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def pipeline(camera, loader, detector, fetcher):
    return MoodMusicPipeline(
        camera=camera,
        loader=loader,
        detector=detector,
        fetcher=fetcher,
        detection_timeout=5.0,
        model_load_timeout=1.0,
        metrics=PerformanceMetrics()
    )


@pytest.fixture
def app(pipeline):
    app = create_app({
        'TESTING': True,
        'MOOD_PIPELINE': pipeline,
        'LOAD_MODELS_ON_STARTUP': False,
        'YOUTUBE_API_KEY': 'test-secret-key',
    })
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def network_error():
    return MusicFetchError('network', 'Error de red: connection refused')
