import os
import sys
sys.path.append(os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

import pandas as pd
from eco_route.config import DEFAULT_CONFIG_PATH

# Parameter workbook template.
# KEY must match the names read in eco_route/constants.py.

PARAMS = [
    # --- SECTION: GLOBAL ---
    {
        "Key": "DECIMALS",
        "Value": 2,
        "Unit": "Integer",
        "Section": "1. Global Settings",
        "Description": "Number of decimal places used in history reports."
    },
    {
        "Key": "BASELINE_MODE",
        "Value": "car",
        "Unit": "Text",
        "Section": "1. Global Settings",
        "Description": "Transport profile id that savings and eco scores are measured against."
    },

    # --- SECTION: VALIDATION & FORMATTING ---
    {
        "Key": "MIN_ADDRESS_LENGTH",
        "Value": 5,
        "Unit": "Characters",
        "Section": "2. Validation & Formatting",
        "Description": "Shortest free-text address (after trimming) accepted as valid."
    },
    {
        "Key": "METERS_THRESHOLD_KM",
        "Value": 0.5,
        "Unit": "km",
        "Section": "2. Validation & Formatting",
        "Description": "Distances strictly below this are shown in metres."
    },
    {
        "Key": "CARBON_GRAMS_THRESHOLD_KG",
        "Value": 1.0,
        "Unit": "kgCO2e",
        "Section": "2. Validation & Formatting",
        "Description": "CO2 masses strictly below this are shown in grams."
    },

    # --- SECTION: SCORING ---
    {
        "Key": "SCORE_AVOIDED_WEIGHT",
        "Value": 0.5,
        "Unit": "Fraction",
        "Section": "3. Eco Score",
        "Description": "Weight of the avoided-emission share in the eco score (rest goes to the not-emitted share)."
    },
    {
        "Key": "SCORE_GREEN_MIN",
        "Value": 80,
        "Unit": "Score",
        "Section": "3. Eco Score",
        "Description": "Lowest score shown in green."
    },
    {
        "Key": "SCORE_AMBER_MIN",
        "Value": 60,
        "Unit": "Score",
        "Section": "3. Eco Score",
        "Description": "Lowest score shown in amber; anything below is red."
    },
    {
        "Key": "IMPACT_HIGH_KG",
        "Value": 1.0,
        "Unit": "kgCO2e",
        "Section": "3. Eco Score",
        "Description": "Savings at or above this make a recommendation high impact."
    },
    {
        "Key": "IMPACT_MEDIUM_KG",
        "Value": 0.2,
        "Unit": "kgCO2e",
        "Section": "3. Eco Score",
        "Description": "Savings at or above this make a recommendation medium impact."
    },

    # --- SECTION: EQUIVALENCES & LEVELS ---
    {
        "Key": "KG_CO2_PER_TREE_YEAR",
        "Value": 21.0,
        "Unit": "kgCO2e/tree/yr",
        "Section": "4. Equivalences & Levels",
        "Description": "CO2 absorbed by one tree in a year, used for tree equivalents."
    },
    {
        "Key": "LEVEL_5_MIN_KG",
        "Value": 10.0,
        "Unit": "kgCO2e",
        "Section": "4. Equivalences & Levels",
        "Description": "Cumulative savings for level 5 (Eco Master)."
    },
    {
        "Key": "LEVEL_4_MIN_KG",
        "Value": 5.0,
        "Unit": "kgCO2e",
        "Section": "4. Equivalences & Levels",
        "Description": "Cumulative savings for level 4 (Green Champion)."
    },
    {
        "Key": "LEVEL_3_MIN_KG",
        "Value": 2.0,
        "Unit": "kgCO2e",
        "Section": "4. Equivalences & Levels",
        "Description": "Cumulative savings for level 3 (Eco Warrior)."
    },
    {
        "Key": "LEVEL_2_MIN_KG",
        "Value": 0.5,
        "Unit": "kgCO2e",
        "Section": "4. Equivalences & Levels",
        "Description": "Cumulative savings for level 2 (Climate Hero)."
    },

    # --- SECTION: TRANSPORT CATALOGUE ---
    {
        "Key": "CAR_KGCO2_PER_KM",
        "Value": 0.25,
        "Unit": "kgCO2e/km",
        "Section": "5. Transport Catalogue",
        "Description": "Private petrol car tailpipe factor."
    },
    {
        "Key": "CAR_SPEED_KMH",
        "Value": 40.0,
        "Unit": "km/h",
        "Section": "5. Transport Catalogue",
        "Description": "Average urban door-to-door car speed."
    },
    {
        "Key": "CAR_COST_PER_KM",
        "Value": 0.45,
        "Unit": "Currency/km",
        "Section": "5. Transport Catalogue",
        "Description": "Car running cost."
    },
    {
        "Key": "ELECTRIC_CAR_KGCO2_PER_KM",
        "Value": 0.05,
        "Unit": "kgCO2e/km",
        "Section": "5. Transport Catalogue",
        "Description": "Electric car factor (grid dependent)."
    },
    {
        "Key": "ELECTRIC_CAR_SPEED_KMH",
        "Value": 40.0,
        "Unit": "km/h",
        "Section": "5. Transport Catalogue",
        "Description": "Average urban electric car speed."
    },
    {
        "Key": "ELECTRIC_CAR_COST_PER_KM",
        "Value": 0.15,
        "Unit": "Currency/km",
        "Section": "5. Transport Catalogue",
        "Description": "Electric car running cost."
    },
    {
        "Key": "PUBLIC_TRANSPORT_KGCO2_PER_KM",
        "Value": 0.08,
        "Unit": "kgCO2e/km",
        "Section": "5. Transport Catalogue",
        "Description": "Per-passenger public transport factor."
    },
    {
        "Key": "PUBLIC_TRANSPORT_SPEED_KMH",
        "Value": 25.0,
        "Unit": "km/h",
        "Section": "5. Transport Catalogue",
        "Description": "Average public transport speed including stops."
    },
    {
        "Key": "PUBLIC_TRANSPORT_COST_PER_KM",
        "Value": 0.10,
        "Unit": "Currency/km",
        "Section": "5. Transport Catalogue",
        "Description": "Public transport fare per km."
    },
    {
        "Key": "BICYCLE_SPEED_KMH",
        "Value": 15.0,
        "Unit": "km/h",
        "Section": "5. Transport Catalogue",
        "Description": "Average cycling speed."
    },
    {
        "Key": "WALKING_SPEED_KMH",
        "Value": 5.0,
        "Unit": "km/h",
        "Section": "5. Transport Catalogue",
        "Description": "Average walking speed."
    },
]


def create_formatted_excel(output_path: str = DEFAULT_CONFIG_PATH) -> str:
    df = pd.DataFrame(PARAMS)
    df = df[["Section", "Key", "Value", "Unit", "Description"]]

    os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)

    # Use xlsxwriter for formatting
    writer = pd.ExcelWriter(output_path, engine='xlsxwriter')
    df.to_excel(writer, index=False, sheet_name='Parameters')

    workbook = writer.book
    worksheet = writer.sheets['Parameters']

    header_fmt = workbook.add_format({
        'bold': True,
        'text_wrap': True,
        'valign': 'top',
        'fg_color': '#10b981',
        'font_color': '#FFFFFF',
        'border': 1
    })
    section_fmt = workbook.add_format({
        'bold': True,
        'bg_color': '#D1FAE5',
        'border': 1
    })
    key_fmt = workbook.add_format({
        'bold': True,
        'font_color': '#333333',
        'bg_color': '#F2F2F2',
        'border': 1
    })
    value_fmt = workbook.add_format({
        'bg_color': '#FFFFCC',  # editable cells
        'border': 1
    })
    text_fmt = workbook.add_format({
        'text_wrap': True,
        'valign': 'top',
        'border': 1
    })

    worksheet.set_column('A:A', 28)  # Section
    worksheet.set_column('B:B', 32)  # Key
    worksheet.set_column('C:C', 12, value_fmt)  # Value
    worksheet.set_column('D:D', 16)  # Unit
    worksheet.set_column('E:E', 70, text_fmt)  # Description

    for col_num, value in enumerate(df.columns.values):
        worksheet.write(0, col_num, value, header_fmt)

    for row_num, row_data in enumerate(PARAMS):
        r = row_num + 1  # header is row 0
        worksheet.write(r, 0, row_data["Section"], section_fmt)
        worksheet.write(r, 1, row_data["Key"], key_fmt)
        worksheet.write(r, 2, row_data["Value"], value_fmt)
        worksheet.write(r, 3, row_data["Unit"], text_fmt)
        worksheet.write(r, 4, row_data["Description"], text_fmt)

    writer.close()
    print(f"Formatted Excel created at {output_path}")
    return output_path


if __name__ == "__main__":
    create_formatted_excel(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_CONFIG_PATH)
