"""Tests de los predicados de visibilidad a lo largo de las transiciones."""

from moodmusic.core.session.state import MoodSession, ErrorKind
from moodmusic.core.session.view import build_view_model

URLS = [f'https://www.youtube.com/embed/v{i}?autoplay=0' for i in range(3)]


def view_of(session):
    return build_view_model(session.snapshot())


def test_idle():
    view = view_of(MoodSession())
    assert view['show_camera_button']
    assert not view['show_detect_button']
    assert not view['show_video']
    assert not view['show_mood']
    assert not view['show_video_grid']
    assert not view['show_error']


def test_camera_button_hidden_after_grant():
    session = MoodSession()
    session.camera_granted()
    view = view_of(session)
    assert not view['show_camera_button']


def test_detect_button_only_with_bound_stream():
    session = MoodSession()
    assert not view_of(session)['show_detect_button']
    
    session.camera_failed('denied')
    assert not view_of(session)['show_detect_button']
    assert view_of(session)['show_camera_button']
    
    session.camera_granted()
    assert view_of(session)['show_detect_button']


def test_mood_shown_once_detected_and_grid_only_with_urls():
    session = MoodSession()
    session.camera_granted()
    seq = session.begin_detection()
    
    view = view_of(session)
    assert view['busy']
    assert not view['show_mood']
    
    session.mood_detected(seq, 'neutral')
    view = view_of(session)
    assert view['show_mood'] and view['mood'] == 'neutral'
    assert not view['show_video_grid']
    
    session.results_ready(seq, URLS)
    view = view_of(session)
    assert view['show_video_grid']
    assert view['music_urls'] == URLS
    assert not view['busy']


def test_grid_stays_after_later_failure():
    session = MoodSession()
    session.camera_granted()
    seq = session.begin_detection()
    session.mood_detected(seq, 'happy')
    session.results_ready(seq, URLS)
    
    seq = session.begin_detection()
    session.fail(seq, ErrorKind.EMPTY_RESULTS, 'none')
    view = view_of(session)
    
    assert view['show_video_grid']
    assert view['show_mood']
    assert view['show_error']
    assert view['error_text'] == 'No music found for this mood.'


def test_no_face_error_before_any_mood():
    session = MoodSession()
    session.camera_granted()
    seq = session.begin_detection()
    session.fail(seq, ErrorKind.NO_FACE, 'none')
    view = view_of(session)
    
    assert view['show_error']
    assert not view['show_mood']
    assert not view['show_video_grid']
