# oddsdash/maps/nfl.py
"""NFL reference data used by the workbook normalizer and demo games."""

NFL_DIVISIONS: dict[str, str] = {
    "Arizona Cardinals":     "NFC West",
    "Atlanta Falcons":       "NFC South",
    "Baltimore Ravens":      "AFC North",
    "Buffalo Bills":         "AFC East",
    "Carolina Panthers":     "NFC South",
    "Chicago Bears":         "NFC North",
    "Cincinnati Bengals":    "AFC North",
    "Cleveland Browns":      "AFC North",
    "Dallas Cowboys":        "NFC East",
    "Denver Broncos":        "AFC West",
    "Detroit Lions":         "NFC North",
    "Green Bay Packers":     "NFC North",
    "Houston Texans":        "AFC South",
    "Indianapolis Colts":    "AFC South",
    "Jacksonville Jaguars":  "AFC South",
    "Kansas City Chiefs":    "AFC West",
    "Las Vegas Raiders":     "AFC West",
    "Los Angeles Chargers":  "AFC West",
    "Los Angeles Rams":      "NFC West",
    "Miami Dolphins":        "AFC East",
    "Minnesota Vikings":     "NFC North",
    "New England Patriots":  "AFC East",
    "New Orleans Saints":    "NFC South",
    "New York Giants":       "NFC East",
    "New York Jets":         "AFC East",
    "Philadelphia Eagles":   "NFC East",
    "Pittsburgh Steelers":   "AFC North",
    "San Francisco 49ers":   "NFC West",
    "Seattle Seahawks":      "NFC West",
    "Tampa Bay Buccaneers":  "NFC South",
    "Tennessee Titans":      "AFC South",
    "Washington Commanders": "NFC East",
}
