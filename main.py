"""
main.py

Flask application for the Tournament of Jazz bracket.

Public endpoints serve the artist catalog, apply bracket picks with downstream cascading,
accept submissions and expose the leaderboard. Admin endpoints (guarded by a password-backed
session cookie) manage the tournament, the artist catalog, the master bracket, round reveals
and matchup previews.

All bracket arithmetic lives in bracket.py / cascade.py and all scoring in scoring.py;
this module only loads records, validates requests and shapes JSON responses.
"""

import os
import json
import hmac
import datetime
from functools import wraps
from flask import Flask, request, jsonify, redirect, url_for, session as cookie_session
from sqlalchemy.exc import IntegrityError

# Import core configuration and logging
from config import logger, SECRET_KEY, ADMIN_PASSWORD, ADMIN_SESSION_DAYS, ARTISTS_JSON, SPREADSHEET_ID
# Import database session, models and helpers
from db import (
    init_db, SessionLocal, Tournament, Artist, Submission, MatchupPreview, RevealError,
    get_latest_tournament, get_master_bracket, upsert_master_bracket, reveal_round, create_submission
)
from bracket import InvalidMatchupError, parse_matchup_key, get_matchup_entrants
from cascade import apply_pick, clear_pick, set_commentary
from scoring import score_submission, build_leaderboard
from report import generate_report
from google_integration import fetch_artists_from_sheets, update_local_db_with_artists, GoogleSheetsError
from constants import (
    REGIONS, REGION_LABELS, REGION_SUBTITLES, SEEDS_PER_REGION, TOURNAMENT_STATUSES
)

# Initialize the Flask application
app = Flask(__name__)
app.secret_key = SECRET_KEY
app.config["ADMIN_PASSWORD"] = ADMIN_PASSWORD
app.permanent_session_lifetime = datetime.timedelta(days=ADMIN_SESSION_DAYS)

ARTIST_FIELDS = [
    "name", "seed", "region", "bio", "instrument", "era",
    "featured_track_url", "featured_track_title", "media",
]


def error_response(message, status):
    return jsonify({"error": message}), status


def admin_required(view):
    """Rejects the request with 401 unless the admin session cookie is set."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        if cookie_session.get("admin_auth") != "authenticated":
            return error_response("Unauthorized", 401)
        return view(*args, **kwargs)
    return wrapped


# ---------------------------
# Request validation helpers
# ---------------------------
def validate_picks(picks):
    """
    Checks that a pick set is a mapping of valid matchup keys to {"winnerId": str}.
    Returns an error message, or None if the pick set is well formed.
    """
    if not isinstance(picks, dict):
        return "picks must be an object"
    for key, pick in picks.items():
        try:
            parse_matchup_key(key)
        except InvalidMatchupError as e:
            return str(e)
        if not isinstance(pick, dict) or not isinstance(pick.get("winnerId"), str) or not pick["winnerId"]:
            return f"Pick {key} must have a winnerId"
    return None


def validate_artist_fields(data, partial=False):
    """Returns an error message for invalid name/seed/region values, or None."""
    if not partial and not (data.get("name") and data.get("seed") and data.get("region")):
        return "name, seed, and region are required"
    if "name" in data and (not isinstance(data["name"], str) or not data["name"].strip()):
        return "name must be a non-empty string"
    if "seed" in data:
        seed = data["seed"]
        if isinstance(seed, bool) or not isinstance(seed, int) or not 1 <= seed <= SEEDS_PER_REGION:
            return f"seed must be an integer between 1 and {SEEDS_PER_REGION}"
    if "region" in data and data["region"] not in REGIONS:
        return f"region must be one of {', '.join(REGIONS)}"
    return None


def parse_deadline(deadline):
    """
    Parses an ISO 8601 deadline into an aware datetime. Naive timestamps are read as UTC
    and a trailing "Z" (as sent by browsers) is accepted.

    Raises:
        ValueError: If the deadline is not an ISO 8601 string.
    """
    if not isinstance(deadline, str):
        raise ValueError(f"Invalid deadline: {deadline!r}")
    text = deadline.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed


def validate_deadline(deadline):
    """Returns an error message unless the deadline is empty or parses, or None."""
    if not deadline:
        return None
    try:
        parse_deadline(deadline)
    except ValueError:
        return "submission_deadline must be an ISO 8601 timestamp"
    return None


def deadline_passed(deadline):
    """True if a stored deadline lies in the past."""
    if not deadline:
        return False
    return parse_deadline(deadline) <= datetime.datetime.now(datetime.timezone.utc)


def check_pick_winner(round_num, matchup_index, picks, artists, winner_id):
    """Returns an error message unless winner_id is one of the two entrants currently in the matchup."""
    contestants = get_matchup_entrants(round_num, matchup_index, picks, artists)
    if winner_id not in [a.id for a in contestants if a is not None]:
        return f"Invalid winner '{winner_id}' for matchup {round_num}-{matchup_index}"
    return None


def visible_official_picks(official_picks, revealed_through):
    """Official picks for revealed rounds only."""
    return {key: pick for key, pick in official_picks.items()
            if parse_matchup_key(key)[0] <= revealed_through}


def import_artists_from_json(json_file):
    """
    Imports the artist catalog from a JSON file if no artists exist yet.
    Expects exactly 4 regions (named as in REGIONS) with 16 seeded artists each:

        {"regions": [{"region": "vocalists", "artists": [{"name": ..., "seed": 1, ...}, ...]}, ...]}
    """
    session = SessionLocal()
    try:
        # If artists already exist, skip the import.
        if session.query(Artist).count() > 0:
            logger.info("Artist catalog already exists. Skipping import.")
            return True

        with open(json_file, 'r') as f:
            data = json.load(f)
        regions = data.get("regions", [])
        if len(regions) != len(REGIONS):
            logger.error(f"[ERROR] Expected {len(REGIONS)} regions, found {len(regions)}.")
            return False

        for region in regions:
            region_name = region.get("region")
            artists = region.get("artists", [])
            if region_name not in REGIONS:
                logger.error(f"[ERROR] Unknown region '{region_name}'.")
                return False
            seeds = sorted(a.get("seed") for a in artists)
            if seeds != list(range(1, SEEDS_PER_REGION + 1)):
                logger.error(f"[ERROR] Region '{region_name}' must have seeds 1-{SEEDS_PER_REGION}, found {seeds}.")
                return False
            for entry in artists:
                fields = {k: entry.get(k) for k in ARTIST_FIELDS if k in entry}
                fields["region"] = region_name
                session.add(Artist(**fields))
        session.commit()
        logger.info("Artist catalog imported successfully from JSON.")
        return True
    except Exception as e:
        logger.error(f"Error importing artists: {e}")
        session.rollback()
        return False
    finally:
        session.close()


# ---------------------------
# Public endpoints
# ---------------------------
@app.route('/api/bracket-data')
def bracket_data():
    """
    Everything the bracket builder needs: the open tournament, the artist catalog,
    region labels and matchup previews.
    """
    session = SessionLocal()
    try:
        tournament = get_latest_tournament(session)
        if not tournament:
            return error_response("No tournament found", 404)
        if tournament.status != "open":
            return jsonify({"error": "Tournament is not accepting submissions",
                            "status": tournament.status}), 403
        artists = session.query(Artist).order_by(Artist.seed).all()
        previews = session.query(MatchupPreview).filter_by(tournament_id=tournament.id).all()
        return jsonify({
            "tournament": tournament.to_dict(),
            "artists": [a.to_dict() for a in artists],
            "regions": [{"key": r, "label": REGION_LABELS[r], "subtitle": REGION_SUBTITLES[r]}
                        for r in REGIONS],
            "previews": [p.to_dict() for p in previews],
        })
    finally:
        session.close()


@app.route('/api/bracket/pick', methods=['POST'])
def bracket_pick():
    """
    Applies one builder action to a client-held pick set.

    Expects JSON with 'picks', 'matchup_key' and 'winner_id' (null clears the matchup),
    plus optional 'commentary'. Returns the new pick set and the keys cascaded away.
    """
    data = request.get_json(silent=True) or {}
    picks = data.get("picks") or {}
    key = data.get("matchup_key")
    winner_id = data.get("winner_id")

    problem = validate_picks(picks)
    if problem:
        return error_response(problem, 400)
    try:
        round_num, matchup_index = parse_matchup_key(key)
    except InvalidMatchupError as e:
        return error_response(str(e), 400)

    session = SessionLocal()
    try:
        if winner_id is None:
            updated, cleared = clear_pick(picks, key)
        else:
            artists = session.query(Artist).all()
            problem = check_pick_winner(round_num, matchup_index, picks, artists, winner_id)
            if problem:
                logger.info(problem)
                return error_response(problem, 400)
            updated, cleared = apply_pick(picks, key, winner_id)
            if "commentary" in data:
                updated = set_commentary(updated, key, data["commentary"])
        return jsonify({"picks": updated, "cleared_keys": cleared})
    finally:
        session.close()


@app.route('/api/submit', methods=['POST'])
def submit():
    """
    Stores a participant's bracket and returns its id and private access token.
    Only accepted while the tournament is open and before its deadline.
    """
    data = request.get_json(silent=True) or {}
    tournament_id = data.get("tournament_id")
    display_name = data.get("display_name")
    picks = data.get("picks")

    if not tournament_id:
        return error_response("tournament_id is required", 400)
    if not isinstance(display_name, str) or not display_name.strip():
        return error_response("display_name is required and must be a non-empty string", 400)
    if not isinstance(picks, dict) or not picks:
        return error_response("picks is required and must be a non-empty object", 400)
    problem = validate_picks(picks)
    if problem:
        return error_response(problem, 400)

    session = SessionLocal()
    try:
        tournament = session.get(Tournament, tournament_id)
        if not tournament:
            return error_response("Tournament not found", 404)
        if tournament.status != "open" or deadline_passed(tournament.submission_deadline):
            logger.warning(f"Rejected submission for closed tournament {tournament_id}")
            return error_response("Tournament is not accepting submissions", 403)
        submission = create_submission(session, tournament_id, display_name, picks)
        return jsonify({"id": submission.id, "access_token": submission.access_token}), 201
    except Exception as e:
        logger.error(f"Error storing submission: {e}")
        session.rollback()
        return error_response(str(e), 500)
    finally:
        session.close()


@app.route('/api/leaderboard')
def leaderboard():
    """Ranked standings of the latest tournament."""
    session = SessionLocal()
    try:
        tournament = get_latest_tournament(session)
        if not tournament:
            return error_response("No tournament found", 404)
        ranked, revealed_through = build_leaderboard(session, tournament)
        return jsonify({
            "tournament": tournament.to_dict(),
            "revealed_through": revealed_through,
            "entries": [entry.to_dict() for entry in ranked],
        })
    finally:
        session.close()


@app.route('/api/bracket/<access_token>')
def view_submission(access_token):
    """
    A submitted bracket with its score so far. Official picks are only included
    for revealed rounds.
    """
    session = SessionLocal()
    try:
        submission = session.query(Submission).filter_by(access_token=access_token).first()
        if not submission:
            return error_response("Bracket not found", 404)
        master = get_master_bracket(session, submission.tournament_id)
        revealed_through = master.revealed_through if master else 0
        official_picks = master.picks if master else {}
        score = None
        if revealed_through > 0:
            score = score_submission(submission.picks, official_picks, revealed_through).to_dict()
        return jsonify({
            "submission": {
                "id": submission.id,
                "display_name": submission.display_name,
                "picks": submission.picks,
                "created_at": submission.created_at,
            },
            "tournament": submission.tournament.to_dict(),
            "revealed_through": revealed_through,
            "official_picks": visible_official_picks(official_picks, revealed_through),
            "score": score,
        })
    finally:
        session.close()


# ---------------------------
# Admin authentication
# ---------------------------
@app.route('/api/admin/auth', methods=['POST'])
def admin_login():
    password = (request.get_json(silent=True) or {}).get("password") or ""
    admin_password = app.config.get("ADMIN_PASSWORD")
    if not admin_password:
        return error_response("Admin password not configured", 500)
    if not hmac.compare_digest(password.encode(), admin_password.encode()):
        logger.warning("Failed admin login attempt")
        return error_response("Invalid password", 401)
    cookie_session.permanent = True
    cookie_session["admin_auth"] = "authenticated"
    return jsonify({"success": True})


@app.route('/api/admin/auth', methods=['DELETE'])
def admin_logout():
    cookie_session.pop("admin_auth", None)
    return jsonify({"success": True})


# ---------------------------
# Admin: tournament
# ---------------------------
@app.route('/api/admin/tournament', methods=['GET'])
@admin_required
def get_tournament():
    session = SessionLocal()
    try:
        tournament = get_latest_tournament(session)
        if not tournament:
            return error_response("No tournament found", 404)
        return jsonify(tournament.to_dict())
    finally:
        session.close()


@app.route('/api/admin/tournament', methods=['POST'])
@admin_required
def create_tournament():
    data = request.get_json(silent=True) or {}
    if not data.get("name"):
        return error_response("Name is required", 400)
    problem = validate_deadline(data.get("submission_deadline"))
    if problem:
        return error_response(problem, 400)
    session = SessionLocal()
    try:
        tournament = Tournament(
            name=data["name"],
            submission_deadline=data.get("submission_deadline") or None,
            status="setup",
        )
        session.add(tournament)
        session.commit()
        logger.info(f"Created tournament '{tournament.name}'")
        return jsonify(tournament.to_dict()), 201
    except Exception as e:
        logger.error(f"Error creating tournament: {e}")
        session.rollback()
        return error_response(str(e), 500)
    finally:
        session.close()


@app.route('/api/admin/tournament', methods=['PUT'])
@admin_required
def update_tournament():
    data = request.get_json(silent=True) or {}
    if not data.get("id"):
        return error_response("Tournament id is required", 400)
    updates = {k: data[k] for k in ("status", "submission_deadline", "name") if k in data}
    if not updates:
        return error_response("No fields to update", 400)
    if "status" in updates and updates["status"] not in TOURNAMENT_STATUSES:
        return error_response(f"status must be one of {', '.join(TOURNAMENT_STATUSES)}", 400)
    if "submission_deadline" in updates:
        problem = validate_deadline(updates["submission_deadline"])
        if problem:
            return error_response(problem, 400)
        updates["submission_deadline"] = updates["submission_deadline"] or None

    session = SessionLocal()
    try:
        tournament = session.get(Tournament, data["id"])
        if not tournament:
            return error_response("Tournament not found", 404)
        for field, value in updates.items():
            setattr(tournament, field, value)
        session.commit()
        logger.info(f"Updated tournament {tournament.id}: {updates}")
        return jsonify(tournament.to_dict())
    except Exception as e:
        logger.error(f"Error updating tournament: {e}")
        session.rollback()
        return error_response(str(e), 500)
    finally:
        session.close()


# ---------------------------
# Admin: artists
# ---------------------------
@app.route('/api/admin/artists', methods=['GET'])
@admin_required
def list_artists():
    session = SessionLocal()
    try:
        artists = session.query(Artist).order_by(Artist.region, Artist.seed).all()
        return jsonify([a.to_dict() for a in artists])
    finally:
        session.close()


@app.route('/api/admin/artists', methods=['POST'])
@admin_required
def create_artist():
    data = request.get_json(silent=True) or {}
    problem = validate_artist_fields(data)
    if problem:
        return error_response(problem, 400)
    session = SessionLocal()
    try:
        artist = Artist(**{k: data.get(k) or None for k in ARTIST_FIELDS})
        session.add(artist)
        session.commit()
        return jsonify(artist.to_dict()), 201
    except IntegrityError:
        session.rollback()
        return error_response(f"Seed {data['seed']} is already taken in region {data['region']}", 409)
    except Exception as e:
        logger.error(f"Error creating artist: {e}")
        session.rollback()
        return error_response(str(e), 500)
    finally:
        session.close()


@app.route('/api/admin/artists', methods=['PUT'])
@admin_required
def update_artist():
    data = request.get_json(silent=True) or {}
    if not data.get("id"):
        return error_response("id is required", 400)
    problem = validate_artist_fields(data, partial=True)
    if problem:
        return error_response(problem, 400)
    session = SessionLocal()
    try:
        artist = session.get(Artist, data["id"])
        if not artist:
            return error_response("Artist not found", 404)
        for field in ARTIST_FIELDS:
            if field in data:
                setattr(artist, field, data[field])
        session.commit()
        return jsonify(artist.to_dict())
    except IntegrityError:
        session.rollback()
        return error_response("Seed is already taken in that region", 409)
    except Exception as e:
        logger.error(f"Error updating artist: {e}")
        session.rollback()
        return error_response(str(e), 500)
    finally:
        session.close()


@app.route('/api/admin/artists', methods=['DELETE'])
@admin_required
def delete_artist():
    artist_id = request.args.get("id")
    if not artist_id:
        return error_response("id query param is required", 400)
    session = SessionLocal()
    try:
        deleted = session.query(Artist).filter_by(id=artist_id).delete()
        session.commit()
        if not deleted:
            return error_response("Artist not found", 404)
        return jsonify({"success": True})
    finally:
        session.close()


# ---------------------------
# Admin: master bracket and reveals
# ---------------------------
@app.route('/api/admin/master-bracket', methods=['GET'])
@admin_required
def get_master():
    session = SessionLocal()
    try:
        tournament = get_latest_tournament(session)
        if not tournament:
            return error_response("No tournament found", 404)
        master = get_master_bracket(session, tournament.id)
        return jsonify(master.to_dict() if master else None)
    finally:
        session.close()


@app.route('/api/admin/master-bracket', methods=['POST'])
@admin_required
def save_master():
    """Replaces the whole official pick set."""
    data = request.get_json(silent=True) or {}
    tournament_id = data.get("tournament_id")
    picks = data.get("picks")
    if not tournament_id:
        return error_response("tournament_id is required", 400)
    if not isinstance(picks, dict):
        return error_response("picks is required and must be an object", 400)
    problem = validate_picks(picks)
    if problem:
        return error_response(problem, 400)
    session = SessionLocal()
    try:
        if not session.get(Tournament, tournament_id):
            return error_response("Tournament not found", 404)
        master = upsert_master_bracket(session, tournament_id, picks)
        logger.info(f"Saved master bracket for tournament {tournament_id} ({len(picks)} picks)")
        return jsonify(master.to_dict())
    except Exception as e:
        logger.error(f"Error saving master bracket: {e}")
        session.rollback()
        return error_response(str(e), 500)
    finally:
        session.close()


@app.route('/api/admin/master-bracket/pick', methods=['POST'])
@admin_required
def master_pick():
    """
    Records one official result. Changing an earlier result clears later official
    picks that carried the old winner forward.
    """
    data = request.get_json(silent=True) or {}
    tournament_id = data.get("tournament_id")
    key = data.get("matchup_key")
    winner_id = data.get("winner_id")
    if not tournament_id:
        return error_response("tournament_id is required", 400)
    try:
        round_num, matchup_index = parse_matchup_key(key)
    except InvalidMatchupError as e:
        return error_response(str(e), 400)

    session = SessionLocal()
    try:
        if not session.get(Tournament, tournament_id):
            return error_response("Tournament not found", 404)
        master = get_master_bracket(session, tournament_id)
        picks = master.picks if master else {}
        if winner_id is None:
            updated, cleared = clear_pick(picks, key)
        else:
            artists = session.query(Artist).all()
            problem = check_pick_winner(round_num, matchup_index, picks, artists, winner_id)
            if problem:
                logger.info(problem)
                return error_response(problem, 400)
            updated, cleared = apply_pick(picks, key, winner_id)
        master = upsert_master_bracket(session, tournament_id, updated)
        if cleared:
            logger.info(f"Official pick {key} changed; cleared {cleared}")
        return jsonify({"master_bracket": master.to_dict(), "cleared_keys": cleared})
    except Exception as e:
        logger.error(f"Error updating master bracket: {e}")
        session.rollback()
        return error_response(str(e), 500)
    finally:
        session.close()


@app.route('/api/admin/reveal', methods=['POST'])
@admin_required
def reveal():
    """Moves revealed_through forward. Reveals cannot be undone."""
    data = request.get_json(silent=True) or {}
    tournament_id = data.get("tournament_id")
    if not tournament_id:
        return error_response("tournament_id is required", 400)
    session = SessionLocal()
    try:
        master = reveal_round(session, tournament_id, data.get("round"))
        return jsonify(master.to_dict())
    except RevealError as e:
        logger.warning(str(e))
        return error_response(str(e), 400)
    except Exception as e:
        logger.error(f"Error revealing round: {e}")
        session.rollback()
        return error_response(str(e), 500)
    finally:
        session.close()


# ---------------------------
# Admin: matchup previews
# ---------------------------
@app.route('/api/admin/matchup-previews', methods=['GET'])
@admin_required
def list_previews():
    tournament_id = request.args.get("tournament_id")
    if not tournament_id:
        return error_response("tournament_id query param is required", 400)
    session = SessionLocal()
    try:
        previews = (session.query(MatchupPreview)
                    .filter_by(tournament_id=tournament_id)
                    .order_by(MatchupPreview.created_at)
                    .all())
        return jsonify([p.to_dict() for p in previews])
    finally:
        session.close()


@app.route('/api/admin/matchup-previews', methods=['POST'])
@admin_required
def create_preview():
    data = request.get_json(silent=True) or {}
    for required in ("tournament_id", "matchup_key", "preview_text"):
        if not data.get(required):
            return error_response(f"{required} is required", 400)
    try:
        parse_matchup_key(data["matchup_key"])
    except InvalidMatchupError as e:
        return error_response(str(e), 400)
    session = SessionLocal()
    try:
        preview = MatchupPreview(
            tournament_id=data["tournament_id"],
            matchup_key=data["matchup_key"],
            headline=data.get("headline") or None,
            preview_text=data["preview_text"],
            fun_fact=data.get("fun_fact") or None,
        )
        session.add(preview)
        session.commit()
        return jsonify(preview.to_dict()), 201
    except Exception as e:
        logger.error(f"Error creating matchup preview: {e}")
        session.rollback()
        return error_response(str(e), 500)
    finally:
        session.close()


@app.route('/api/admin/matchup-previews', methods=['PUT'])
@admin_required
def update_preview():
    data = request.get_json(silent=True) or {}
    if not data.get("id"):
        return error_response("id is required", 400)
    updates = {k: data[k] for k in ("headline", "preview_text", "fun_fact", "matchup_key") if k in data}
    if not updates:
        return error_response("No fields to update", 400)
    if "matchup_key" in updates:
        try:
            parse_matchup_key(updates["matchup_key"])
        except InvalidMatchupError as e:
            return error_response(str(e), 400)
    session = SessionLocal()
    try:
        preview = session.get(MatchupPreview, data["id"])
        if not preview:
            return error_response("Matchup preview not found", 404)
        for field, value in updates.items():
            setattr(preview, field, value)
        session.commit()
        return jsonify(preview.to_dict())
    except Exception as e:
        logger.error(f"Error updating matchup preview: {e}")
        session.rollback()
        return error_response(str(e), 500)
    finally:
        session.close()


# ---------------------------
# Admin: submissions and reports
# ---------------------------
@app.route('/api/admin/submissions')
@admin_required
def list_submissions():
    """All submissions of a tournament (latest by default) with score and rank."""
    session = SessionLocal()
    try:
        tournament_id = request.args.get("tournament_id")
        tournament = session.get(Tournament, tournament_id) if tournament_id else get_latest_tournament(session)
        if not tournament:
            return error_response("No tournament found", 404)
        ranked, revealed_through = build_leaderboard(session, tournament)
        return jsonify({"revealed_through": revealed_through,
                        "entries": [entry.to_dict() for entry in ranked]})
    finally:
        session.close()


@app.route('/generate_pdf')
@admin_required
def generate_pdf_route():
    """
    Generates the PDF standings report and redirects to the generated file.
    """
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    pdf_filename = f"Tournament_of_Jazz_{timestamp}.pdf"
    os.makedirs(app.static_folder, exist_ok=True)
    pdf_path = os.path.join(app.static_folder, pdf_filename)
    if not generate_report(pdf_path):
        return error_response("Report generation failed", 500)
    return redirect(url_for('static', filename=pdf_filename))


if __name__ == '__main__':
    # Initialize the database and tables if not already created
    init_db()
    # Optionally seed the artist catalog from the JSON file
    if os.path.exists(ARTISTS_JSON):
        import_artists_from_json(ARTISTS_JSON)
    if SPREADSHEET_ID:
        try:
            update_local_db_with_artists(fetch_artists_from_sheets())
        except GoogleSheetsError as e:
            logger.error(f"Google Sheets integration error: {e}")
    # Start the Flask development server
    app.run(debug=False)
