"""Tests del cliente de búsqueda de YouTube."""

from unittest import mock

import pytest
import requests

from moodmusic.core.music.youtube import YouTubeMusicFetcher, MusicFetchError


def make_response(status_code=200, payload=None, json_error=None):
    response = mock.Mock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def make_fetcher(response=None, error=None, **kwargs):
    session = mock.Mock()
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    kwargs.setdefault('api_key', 'secret-key')
    return YouTubeMusicFetcher(session=session, **kwargs), session


def items(*video_ids):
    return {'items': [{'id': {'kind': 'youtube#video', 'videoId': vid}, 'snippet': {}} for vid in video_ids]}


def test_request_parameters():
    fetcher, session = make_fetcher(make_response(payload=items('a')), timeout=3.0)
    
    fetcher.fetch('happy upbeat music')
    
    session.get.assert_called_once_with(
        'https://www.googleapis.com/youtube/v3/search',
        params={
            'part': 'snippet',
            'q': 'happy upbeat music',
            'key': 'secret-key',
            'type': 'video',
            'maxResults': 10,
        },
        timeout=3.0
    )


def test_ten_items_become_ten_embed_urls_in_order():
    ids = [f'vid{i}' for i in range(10)]
    fetcher, _ = make_fetcher(make_response(payload=items(*ids)))
    
    urls = fetcher.fetch('chill background music')
    
    assert urls == [f'https://www.youtube.com/embed/vid{i}?autoplay=0' for i in range(10)]


def test_items_without_video_id_are_skipped():
    payload = items('a', 'b')
    payload['items'].insert(1, {'id': {'kind': 'youtube#channel', 'channelId': 'x'}})
    payload['items'].append({'snippet': {}})
    fetcher, _ = make_fetcher(make_response(payload=payload))
    
    assert fetcher.fetch('q') == [
        'https://www.youtube.com/embed/a?autoplay=0',
        'https://www.youtube.com/embed/b?autoplay=0',
    ]


def test_max_results_is_capped_at_ten():
    fetcher, _ = make_fetcher(make_response(payload=items('a')), max_results=50)
    assert fetcher.max_results == 10
    assert fetcher.build_params('q')['maxResults'] == 10


@pytest.mark.parametrize('payload', [{'items': []}, {}, {'items': None}])
def test_empty_results(payload):
    fetcher, _ = make_fetcher(make_response(payload=payload))
    with pytest.raises(MusicFetchError) as excinfo:
        fetcher.fetch('q')
    assert excinfo.value.kind == 'empty_results'


def test_network_failure():
    fetcher, _ = make_fetcher(error=requests.ConnectionError('connection refused'))
    with pytest.raises(MusicFetchError) as excinfo:
        fetcher.fetch('q')
    assert excinfo.value.kind == 'network'


def test_timeout_is_a_network_failure():
    fetcher, _ = make_fetcher(error=requests.Timeout('read timed out'))
    with pytest.raises(MusicFetchError) as excinfo:
        fetcher.fetch('q')
    assert excinfo.value.kind == 'network'


def test_http_error_status():
    payload = {'error': {'code': 403, 'message': 'quotaExceeded'}}
    fetcher, _ = make_fetcher(make_response(status_code=403, payload=payload))
    with pytest.raises(MusicFetchError) as excinfo:
        fetcher.fetch('q')
    assert excinfo.value.kind == 'api'


def test_invalid_json():
    fetcher, _ = make_fetcher(make_response(json_error=ValueError('Expecting value')))
    with pytest.raises(MusicFetchError) as excinfo:
        fetcher.fetch('q')
    assert excinfo.value.kind == 'malformed'


def test_non_object_body():
    fetcher, _ = make_fetcher(make_response(payload=['not', 'an', 'object']))
    with pytest.raises(MusicFetchError) as excinfo:
        fetcher.fetch('q')
    assert excinfo.value.kind == 'malformed'


def test_missing_api_key_does_not_hit_the_network():
    fetcher, session = make_fetcher(make_response(payload=items('a')), api_key=None)
    with pytest.raises(MusicFetchError) as excinfo:
        fetcher.fetch('q')
    assert excinfo.value.kind == 'configuration'
    session.get.assert_not_called()


def test_api_key_is_not_logged(caplog):
    fetcher, _ = make_fetcher(make_response(payload=items('a')))
    with caplog.at_level('DEBUG'):
        fetcher.fetch('q')
    assert 'secret-key' not in caplog.text


def test_api_key_is_redacted_from_network_errors(caplog):
    url = 'https://www.googleapis.com/youtube/v3/search?part=snippet&q=q&key=secret-key&type=video'
    error = requests.ConnectionError(f"HTTPSConnectionPool: Max retries exceeded with url: {url}")
    fetcher, _ = make_fetcher(error=error)
    
    with caplog.at_level('DEBUG'):
        with pytest.raises(MusicFetchError) as excinfo:
            fetcher.fetch('q')
    
    assert excinfo.value.kind == 'network'
    assert 'secret-key' not in excinfo.value.message
    assert 'secret-key' not in str(excinfo.value)
    assert 'secret-key' not in caplog.text
    assert 'key=***' in excinfo.value.message
    assert excinfo.value.__cause__ is None
