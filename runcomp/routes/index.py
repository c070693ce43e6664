from flask import Blueprint, jsonify

from runcomp.helpers.competition import competition_summary

index_bp = Blueprint("index", __name__)

@index_bp.route("/")
@index_bp.route("/api/competition")
def index():
    """
    Competition banner data: dates, scoring rules, live/finished flags and
    how far through the competition we are.
    """
    return jsonify({"data": competition_summary()})
