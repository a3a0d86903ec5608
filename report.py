"""
report.py

This module generates a PDF standings report for the Tournament of Jazz.
It includes:
  - A standings table with each participant's rank, points per round and total,
    with tied ranks merged into a single cell.
  - Several visual sections:
      * A line chart of participant totals.
      * A bar chart of the most picked champions.
      * An upsets table listing every revealed official result won by the lower seed.
Each visual is grouped with its title so that they remain on the same page.
"""

import datetime
from io import BytesIO
import pandas as pd
import plotly.graph_objects as go

from reportlab.platypus import (
    SimpleDocTemplate, Paragraph, Spacer, Image, PageBreak, KeepTogether, Table, TableStyle
)
from reportlab.lib.pagesizes import LETTER
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from config import logger
from db import SessionLocal, Artist, Submission, get_latest_tournament, get_master_bracket
from bracket import parse_matchup_key, get_matchup_entrants, matchup_key, region_for_matchup
from scoring import build_leaderboard
from constants import NUM_ROUNDS, ROUND_NAMES, ROUND_ORDER, REGION_LABELS

TABLE_STYLE = [
    ('BACKGROUND', (0, 0), (-1, 0), colors.grey),
    ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
    ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
    ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
    ('BOTTOMPADDING', (0, 0), (-1, 0), 12),
    ('BACKGROUND', (0, 1), (-1, -1), colors.beige),
    ('GRID', (0, 0), (-1, -1), 1, colors.black)
]


def generate_report(pdf_filename=None):
    """
    Generates a PDF report for the latest tournament.

    Args:
        pdf_filename (str, optional): Output PDF filename. If not provided, a timestamp-based name is used.

    Returns:
        bool: True if the PDF was written.
    """
    if not pdf_filename:
        timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
        pdf_filename = f"Jazz_Bracket_Report_{timestamp}.pdf"

    # Use narrow margins: 0.5 inch (36 points)
    doc = SimpleDocTemplate(pdf_filename, pagesize=LETTER,
                            leftMargin=36, rightMargin=36,
                            topMargin=36, bottomMargin=36)
    story = []
    styles = getSampleStyleSheet()
    session = SessionLocal()

    try:
        tournament = get_latest_tournament(session)
        if not tournament:
            logger.error("Cannot generate report: no tournament found.")
            return False
        artists = session.query(Artist).all()
        master = get_master_bracket(session, tournament.id)
        official_picks = master.picks if master else {}
        ranked, revealed_through = build_leaderboard(session, tournament)
        standings_df = standings_frame(ranked)

        story.append(Paragraph(f"{tournament.name} Standings", styles['Title']))
        if revealed_through:
            subtitle = f"Results revealed through the {ROUND_NAMES[revealed_through]}"
        else:
            subtitle = "No results revealed yet"
        story.append(Paragraph(f'<para align="center"><font size="8" color="grey">{subtitle}</font></para>',
                               styles['Normal']))
        story.append(Spacer(1, 12))

        if standings_df.empty:
            story.append(Paragraph("No submissions yet.", styles['Normal']))
        else:
            story.append(standings_table(standings_df))
        story.append(PageBreak())

        # ---------------- Visuals Section ----------------
        visuals = []

        # -- Participant Points Line Chart --
        line_img = None
        if not standings_df.empty:
            fig_line = go.Figure(
                data=[go.Scatter(x=standings_df['Name'], y=standings_df['Total'], mode="lines+markers")],
                layout=dict(template="plotly_white")
            )
            fig_line.update_layout(
                title="",
                xaxis_title="Participant",
                yaxis_title="Points",
                xaxis_tickangle=-45,
                width=800,
                margin=dict(l=40, r=40, t=40, b=150),
                xaxis=dict(tickfont=dict(size=10))
            )
            line_img = fig_to_image(fig_line)
        points_group = [Paragraph('<para align="center"><b>Participant Points</b></para>', styles['Heading2'])]
        if line_img:
            points_group.append(Image(BytesIO(line_img), width=500, height=300))
        visuals.append(KeepTogether(points_group))
        visuals.append(Spacer(1, 12))

        # -- Most Picked Champions --
        submissions = session.query(Submission).filter_by(tournament_id=tournament.id).all()
        champions_df = champion_pick_counts(submissions, artists)
        champ_img = None
        if not champions_df.empty:
            top_champions = champions_df.head(10)
            fig_champs = go.Figure(
                data=[go.Bar(x=top_champions['artist'], y=top_champions['pick_count'])],
                layout=dict(template="plotly_white")
            )
            fig_champs.update_layout(title="", xaxis_title="Artist", yaxis_title="Number of Picks")
            champ_img = fig_to_image(fig_champs)
        champ_group = [Paragraph('<para align="center"><b>Most Picked Champions</b></para>', styles['Heading2'])]
        if champ_img:
            champ_group.append(Image(BytesIO(champ_img), width=400, height=300))
        visuals.append(KeepTogether(champ_group))
        visuals.append(Spacer(1, 12))

        # -- Upsets Table --
        upsets = find_upsets(official_picks, artists, revealed_through)
        upset_group = [Paragraph('<para align="center"><b>Biggest Upsets</b></para>', styles['Heading2'])]
        if upsets:
            upset_data = [['Round', 'Region', 'Winner', 'Loser', 'Seed Differential']]
            for up in upsets:
                upset_data.append([up['round'], up['region'], up['winner'], up['loser'], up['differential']])
            upset_table = Table(upset_data)
            upset_table.setStyle(TableStyle(TABLE_STYLE))
            upset_group.append(upset_table)
        visuals.append(KeepTogether(upset_group))

        for group in visuals:
            story.append(group)

        doc.build(story, onFirstPage=add_page_number, onLaterPages=add_page_number)
        logger.info(f"PDF report saved as {pdf_filename}")
        return True
    except Exception as e:
        logger.error(f"Error generating PDF: {e}")
        return False
    finally:
        session.close()


def standings_frame(ranked):
    """
    One row per ranked submission: Rank, Name, points for each round, Total.
    """
    rows = []
    for entry in ranked:
        row = {"Rank": entry.rank, "Name": entry.display_name}
        for round_num in range(1, NUM_ROUNDS + 1):
            row[ROUND_NAMES[round_num]] = entry.score.by_round.get(round_num, 0)
        row["Total"] = entry.score.total
        rows.append(row)
    columns = ["Rank", "Name"] + ROUND_ORDER + ["Total"]
    return pd.DataFrame(rows, columns=columns)


def standings_table(standings_df):
    """Standings as a reportlab Table, merging the Rank cell of tied rows."""
    table_data = [list(standings_df.columns)]
    for row in standings_df.itertuples(index=False):
        table_data.append([str(v) for v in row])

    # Determine groups of rows with the same rank to merge the "Rank" cell vertically.
    span_commands = []
    row_idx = 1  # start after header row (row 0)
    while row_idx < len(table_data):
        start_idx = end_idx = row_idx
        while end_idx + 1 < len(table_data) and table_data[end_idx + 1][0] == table_data[row_idx][0]:
            end_idx += 1
        if end_idx > start_idx:
            span_commands.append(("SPAN", (0, start_idx), (0, end_idx)))
        row_idx = end_idx + 1

    table = Table(table_data, hAlign='CENTER', repeatRows=1)
    table.setStyle(TableStyle(TABLE_STYLE + span_commands))
    return table


def champion_pick_counts(submissions, artists):
    """
    Number of submissions picking each artist as champion, most picked first.

    Returns:
        DataFrame with columns 'artist' and 'pick_count'.
    """
    names = {a.id: a.name for a in artists}
    champion_key = matchup_key(NUM_ROUNDS, 0)
    picked = [names.get(s.picks[champion_key]["winnerId"], "Unknown")
              for s in submissions if champion_key in s.picks]
    if not picked:
        return pd.DataFrame(columns=['artist', 'pick_count'])
    counts = pd.Series(picked).value_counts().rename_axis('artist').reset_index(name='pick_count')
    return counts.sort_values(by=['pick_count', 'artist'], ascending=[False, True]).reset_index(drop=True)


def find_upsets(official_picks, artists, revealed_through):
    """
    Revealed official results won by the higher (worse) seed, biggest differential first.

    Returns:
        list of dicts with round, region, winner, loser and differential.
    """
    upsets = []
    for key, pick in official_picks.items():
        round_num, matchup_index = parse_matchup_key(key)
        if round_num > revealed_through:
            continue
        entrant_a, entrant_b = get_matchup_entrants(round_num, matchup_index, official_picks, artists)
        if entrant_a is None or entrant_b is None:
            continue
        if pick.get("winnerId") == entrant_a.id:
            winner, loser = entrant_a, entrant_b
        elif pick.get("winnerId") == entrant_b.id:
            winner, loser = entrant_b, entrant_a
        else:
            continue
        if winner.seed > loser.seed:
            region = region_for_matchup(round_num, matchup_index)
            upsets.append({
                'round': ROUND_NAMES[round_num],
                'region': REGION_LABELS[region] if region else "-",
                'winner': f"({winner.seed}) {winner.name}",
                'loser': f"({loser.seed}) {loser.name}",
                'differential': winner.seed - loser.seed,
            })
    return sorted(upsets, key=lambda x: x['differential'], reverse=True)


def fig_to_image(fig):
    """PNG bytes for a plotly figure, or None when export fails (the chart is then left out)."""
    try:
        return fig.to_image(format="png")
    except Exception as e:
        logger.error("Error converting Plotly figure to PNG: %s", e)
        return None


def add_page_number(canvas, doc):
    # Footer: "Page N", centered.
    page_num = canvas.getPageNumber()
    text = f"Page {page_num}"
    canvas.drawCentredString(LETTER[0] / 2.0, 20, text)
