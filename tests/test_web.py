"""Tests for the Flask JSON API."""

import pytest

from peg_board import Board
import peg_web
from peg_web import app


@pytest.fixture
def client():
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


def seed_session(client, board):
    with client.session_transaction() as sess:
        sess['seed'] = board.to_list()
        sess['moves'] = []
        sess['redo'] = []
        sess['selected'] = None


class TestState:

    def test_fresh_state(self, client):
        data = client.get('/api/state').get_json()
        assert data['pegs'] == 35
        assert data['moves'] == 0
        assert data['status'] == 'playing'
        assert data['grid'][4][2] == 0
        assert data['grid'][0][1] == -1
        assert data['can_undo'] is False

    def test_corrupt_session_is_reset(self, client):
        with client.session_transaction() as sess:
            sess['seed'] = Board().to_list()
            sess['moves'] = [[0, 0, 2, 2]]
        data = client.get('/api/state').get_json()
        assert data['pegs'] == 35
        assert data['moves'] == 0


class TestMoves:

    def test_drag_style_move(self, client):
        resp = client.post('/api/move', json={'src': [2, 2], 'dst': [4, 2]})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data['success'] is True
        assert data['pegs'] == 34
        assert data['grid'][3][2] == 0

        # persisted in the session
        assert client.get('/api/state').get_json()['moves'] == 1

    def test_click_style_move(self, client):
        data = client.post('/api/select', json={'row': 6, 'col': 4}).get_json()
        assert data['success'] is True
        assert data['selected'] == [6, 4]
        assert data['targets'] == [[4, 2]]

        data = client.post('/api/move', json={'dst': [4, 2]}).get_json()
        assert data['success'] is True
        assert data['selected'] is None
        assert data['grid'][5][3] == 0

    def test_select_empty_hole(self, client):
        data = client.post('/api/select', json={'row': 4, 'col': 2}).get_json()
        assert data['success'] is False
        assert data['selected'] is None

    def test_illegal_move(self, client):
        resp = client.post('/api/move', json={'src': [0, 0], 'dst': [4, 2]})
        assert resp.status_code == 400
        data = resp.get_json()
        assert data['error'] == 'not_a_jump'
        assert data['pegs'] == 35

    def test_move_without_source(self, client):
        resp = client.post('/api/move', json={'dst': [4, 2]})
        assert resp.status_code == 400
        assert resp.get_json()['error'] == 'bad_payload'

    def test_malformed_payload(self, client):
        assert client.post('/api/move', json={'src': 'x', 'dst': [4, 2]}).status_code == 400
        assert client.post('/api/move', json={}).status_code == 400
        assert client.post('/api/select', json={'row': 'a'}).status_code == 400

    def test_non_integer_coordinates_rejected(self, client):
        resp = client.post('/api/move', json={'src': [2.9, 2.7], 'dst': [4.4, 2.2]})
        assert resp.status_code == 400
        assert resp.get_json()['error'] == 'bad_payload'
        assert client.post('/api/select', json={'row': True, 'col': False}).status_code == 400
        assert client.post('/api/move', json={'src': [2, 2], 'dst': ['4', 2]}).status_code == 400
        assert client.get('/api/state').get_json()['pegs'] == 35

    def test_win_then_locked(self, client):
        seed_session(client, Board.from_pegs([(2, 2), (3, 2)]))
        data = client.post('/api/move', json={'src': [2, 2], 'dst': [4, 2]}).get_json()
        assert data['status'] == 'won'
        assert data['message'] == 'You win!'

        resp = client.post('/api/select', json={'row': 4, 'col': 2})
        assert resp.status_code == 409
        assert resp.get_json()['error'] == 'game_over'

    def test_no_moves_message(self, client):
        seed_session(client, Board.from_pegs([(0, 0), (1, 0), (7, 0), (7, 7)]))
        data = client.post('/api/move', json={'src': [0, 0], 'dst': [2, 0]}).get_json()
        assert data['status'] == 'lost'
        assert data['message'] == 'No more valid moves. You lose!'


class TestHistory:

    def test_undo_redo(self, client):
        client.post('/api/move', json={'src': [2, 2], 'dst': [4, 2]})

        data = client.post('/api/undo').get_json()
        assert data['success'] is True
        assert data['pegs'] == 35
        assert data['can_redo'] is True

        assert client.post('/api/undo').get_json()['success'] is False

        data = client.post('/api/redo').get_json()
        assert data['success'] is True
        assert data['pegs'] == 34

    def test_undo_unlocks_finished_game(self, client):
        seed_session(client, Board.from_pegs([(2, 2), (3, 2)]))
        client.post('/api/move', json={'src': [2, 2], 'dst': [4, 2]})
        data = client.post('/api/undo').get_json()
        assert data['status'] == 'playing'
        assert data['message'] == ''

    def test_reset(self, client):
        client.post('/api/move', json={'src': [2, 2], 'dst': [4, 2]})
        data = client.post('/api/reset').get_json()
        assert data['pegs'] == 35
        assert data['can_undo'] is False


class TestMain:
    """Configuration is read when the server starts, not on import."""

    def test_main_reads_environment(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(peg_web.app, 'run', lambda **kw: calls.update(kw))
        monkeypatch.setattr(peg_web.app, 'secret_key', peg_web.app.secret_key)
        monkeypatch.setenv('PEG_PORT', '8123')
        monkeypatch.setenv('PEG_SECRET_KEY', 'from-env')
        peg_web.main()
        assert calls['port'] == 8123
        assert peg_web.app.secret_key == 'from-env'

    def test_bad_port_fails_at_startup(self, monkeypatch):
        monkeypatch.setattr(peg_web.app, 'run', lambda **kw: None)
        monkeypatch.setenv('PEG_PORT', 'eighty')
        with pytest.raises(ValueError, match="PEG_PORT"):
            peg_web.main()
