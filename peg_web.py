import logging
import secrets

from flask import Flask, jsonify, request, session

from peg_board import Board
from peg_config import load_config, setup_logging
from peg_engine import BoardEngine

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = secrets.token_hex(16)


class BadPayload(ValueError):
    pass


# ==========================================
#  session <-> engine
# ==========================================
def _pos(value):
    """[row, col] from JSON -> (row, col); raises BadPayload."""
    try:
        row, col = value
    except (TypeError, ValueError):
        raise BadPayload(f"expected [row, col], got {value!r}") from None
    # bool is an int subclass; floats would be truncated
    if type(row) is not int or type(col) is not int:
        raise BadPayload(f"expected integer [row, col], got {value!r}")
    return row, col


def _move_key(move):
    return [move.src.row, move.src.col, move.dst.row, move.dst.col]


def load_engine():
    engine = BoardEngine()
    if 'seed' not in session:
        return engine
    try:
        engine.restore(
            Board.from_list(session['seed']),
            [((r1, c1), (r2, c2)) for r1, c1, r2, c2 in session.get('moves', [])],
            redo=[((r1, c1), (r2, c2)) for r1, c1, r2, c2 in session.get('redo', [])],
            selected=session.get('selected'),
        )
    except (ValueError, TypeError) as e:
        logger.warning("discarding corrupt session state: %s", e)
        engine.reset()
    return engine


def save_engine(engine):
    session['seed'] = engine.history[0].to_list()
    session['moves'] = [_move_key(m) for m in engine.move_log]
    session['redo'] = [_move_key(m) for m in engine.redo_log]
    session['selected'] = list(engine.selected) if engine.selected else None


def state_payload(engine):
    return {
        'grid': engine.board.as_array().tolist(),
        'pegs': engine.board.count_pegs(),
        'moves': len(engine.move_log),
        'selected': list(engine.selected) if engine.selected else None,
        'targets': [list(m.dst) for m in engine.legal_moves() if m.src == engine.selected],
        'status': engine.status.value,
        'message': engine.message,
        'can_undo': engine.can_undo,
        'can_redo': engine.can_redo,
    }


@app.errorhandler(BadPayload)
def bad_payload(e):
    logger.warning("bad request on %s: %s", request.path, e)
    return jsonify({'success': False, 'error': 'bad_payload', 'detail': str(e)}), 400


# ==========================================
#  routes
# ==========================================
@app.route('/api/state', methods=['GET'])
def get_state():
    engine = load_engine()
    save_engine(engine)
    return jsonify(state_payload(engine))


@app.route('/api/select', methods=['POST'])
def select():
    engine = load_engine()
    data = request.get_json(silent=True) or {}
    pos = _pos((data.get('row'), data.get('col')))
    if engine.is_game_over():
        return jsonify({'success': False, 'error': 'game_over', **state_payload(engine)}), 409
    ok = engine.select_peg(pos)
    save_engine(engine)
    return jsonify({'success': ok, **state_payload(engine)})


@app.route('/api/move', methods=['POST'])
def make_move():
    engine = load_engine()
    data = request.get_json(silent=True) or {}
    if 'dst' not in data:
        raise BadPayload("missing 'dst'")
    dst = _pos(data['dst'])
    src = _pos(data['src']) if data.get('src') is not None else engine.selected
    if src is None:
        raise BadPayload("no 'src' given and no peg selected")

    if engine.is_game_over():
        return jsonify({'success': False, 'error': 'game_over', **state_payload(engine)}), 409

    result = engine.attempt_move(src, dst)
    if not result:
        return jsonify({'success': False, 'error': result.error.value, **state_payload(engine)}), 400
    save_engine(engine)
    return jsonify({'success': True, **state_payload(engine)})


@app.route('/api/undo', methods=['POST'])
def undo():
    engine = load_engine()
    ok = engine.undo()
    save_engine(engine)
    return jsonify({'success': ok, **state_payload(engine)})


@app.route('/api/redo', methods=['POST'])
def redo():
    engine = load_engine()
    ok = engine.redo()
    save_engine(engine)
    return jsonify({'success': ok, **state_payload(engine)})


@app.route('/api/reset', methods=['POST'])
def reset():
    engine = BoardEngine()
    save_engine(engine)
    return jsonify({'success': True, **state_payload(engine)})


def main():
    config = load_config()
    setup_logging(config['log_level'])
    app.secret_key = config['secret_key']
    app.run(host=config['host'], port=config['port'], debug=config['debug'])


if __name__ == '__main__':
    main()
