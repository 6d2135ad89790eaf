"""Run sample import rows through the matcher and print the decision tiers."""

import pandas as pd

from fieldmatch import FieldMatcher

BANKS = [
    {"id": "b1", "name": "BCA", "local_name": "Bank Central Asia", "alternate_name": "BCA001"},
    {"id": "b2", "name": "Bank Muamalat", "local_name": "Bank Muamalat Indonesia", "alternate_name": "MUAMALAT"},
    {"id": "b3", "name": "Bank Mandiri", "local_name": "PT Bank Mandiri", "alternate_name": "MANDIRI"},
    {"id": "b4", "name": "BRI", "local_name": "Bank Rakyat Indonesia", "alternate_name": "BRI002"},
]

CITIES = [
    {"id": "c1", "name": "Yogyakarta", "local_name": "Kota Yogyakarta", "alternate_name": "Jogja"},
    {"id": "c2", "name": "Kabupaten Sleman", "local_name": "Kab Sleman", "alternate_name": "Sleman"},
    {"id": "c3", "name": "Kabupaten Bantul", "local_name": "Kab Bantul", "alternate_name": "Bantul"},
    {"id": "c4", "name": "Jakarta Pusat", "local_name": "Jakarta Central", "alternate_name": "Jakpus"},
]

ROWS = [
    {"bank": "Muamalat", "city": "Jogja"},
    {"bank": "Mandiri", "city": "Kab Sleman"},
    {"bank": "BCA", "city": "Sleman"},
    {"bank": "Bank BRI", "city": "Jakarta"},
]

matcher = FieldMatcher()
bank_results = matcher.match_all([r["bank"] for r in ROWS], BANKS, "banks")
city_results = matcher.match_all([r["city"] for r in ROWS], CITIES, "cities")

rows = []
for r in bank_results + city_results:
    rows.append({
        "field": r.field_type,
        "value": r.search_term,
        "match": r.match_name,
        "similarity": r.similarity,
        "match_type": r.match_type,
        "tier": r.tier,
    })

df_out = pd.DataFrame(rows)
print(df_out.to_string(index=False))

accepted = (df_out["tier"] != "REJECT").sum()
print(f"\nAccepted: {accepted}/{len(df_out)}")
for tier, count in matcher.stats.tiers.items():
    print(f"  {tier}: {count}")
