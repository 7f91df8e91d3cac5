"""Seed the regions of Cameroon and their divisions (reference data, immutable after seeding)."""
import re
import unicodedata

from sqlalchemy.orm import Session
from camrent.models.region import Region, Division

# (id, name, divisions); ids are stable so links like ?region_id=5 keep working
REGIONS = [
    (1, "Adamawa", ["Djérem", "Faro-et-Déo", "Mayo-Banyo", "Mbéré", "Vina"]),
    (2, "Centre", [
        "Haute-Sanaga", "Lekié", "Mbam-et-Inoubou", "Mbam-et-Kim", "Méfou-et-Afamba",
        "Méfou-et-Akono", "Mfoundi", "Nyong-et-Kéllé", "Nyong-et-Mfoumou", "Nyong-et-So'o",
    ]),
    (3, "East", ["Boumba-et-Ngoko", "Haut-Nyong", "Kadey", "Lom-et-Djérem"]),
    (4, "Far North", ["Diamaré", "Logone-et-Chari", "Mayo-Danay", "Mayo-Kani", "Mayo-Sava", "Mayo-Tsanaga"]),
    (5, "Littoral", ["Moungo", "Nkam", "Sanaga-Maritime", "Wouri"]),
    (6, "North", ["Bénoué", "Faro", "Mayo-Louti", "Mayo-Rey"]),
    (7, "Northwest", ["Boyo", "Bui", "Donga-Mantung", "Menchum", "Mezam", "Momo", "Ngo-Ketunjia"]),
    (8, "South", ["Dja-et-Lobo", "Mvila", "Océan", "Vallée-du-Ntem"]),
    (9, "Southwest", ["Fako", "Koupé-Manengouba", "Lebialem", "Manyu", "Meme", "Ndian"]),
    (10, "West", ["Bamboutos", "Haut-Nkam", "Hauts-Plateaux", "Koung-Khi", "Menoua", "Mifi", "Ndé", "Noun"]),
]


def slugify(name: str) -> str:
    """'Nyong-et-So'o' -> 'nyong-et-so-o'."""
    ascii_name = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]+", "-", ascii_name.lower()).strip("-")


def seed_regions(db: Session) -> None:
    if db.query(Region).count() > 0:
        return
    for region_id, name, divisions in REGIONS:
        region = Region(id=region_id, name=name, slug=slugify(name))
        db.add(region)
        for division_name in divisions:
            db.add(Division(name=division_name, slug=slugify(division_name), region=region))
    db.commit()
