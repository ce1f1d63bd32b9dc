import asyncio

from recipe_api.config import get_config_for_service
from recipe_api.framework.logging import log_event

from .main import SERVICE_NAME, build_recipe_service

SAMPLE_RECIPES = [
    {
        "title": "Nasi Goreng Sederhana",
        "description": "Nasi goreng yang mudah dibuat dengan bahan-bahan sederhana",
        "ingredients": [
            "2 porsi nasi",
            "2 butir telur",
            "3 siung bawang putih",
            "2 sdm kecap manis",
            "1 sdt garam",
            "Minyak untuk menumis",
        ],
        "instructions": [
            "Panaskan minyak di wajan",
            "Tumis bawang putih hingga harum",
            "Masukkan telur, orak-arik",
            "Tambahkan nasi, aduk rata",
            "Bumbui dengan kecap manis dan garam",
            "Aduk hingga merata dan sajikan",
        ],
    },
    {
        "title": "Spaghetti Aglio Olio",
        "description": "Pasta Italia klasik dengan bawang putih dan olive oil",
        "ingredients": [
            "200g spaghetti",
            "4 siung bawang putih",
            "3 sdm olive oil",
            "1 sdt cabe bubuk",
            "Garam secukupnya",
            "Peterseli cincang",
        ],
        "instructions": [
            "Rebus spaghetti hingga al dente",
            "Panaskan olive oil, tumis bawang putih",
            "Tambahkan cabe bubuk",
            "Masukkan spaghetti yang sudah direbus",
            "Aduk rata, tambahkan garam",
            "Taburi peterseli dan sajikan",
        ],
    },
    {
        "title": "Rendang Daging",
        "description": "Rendang daging sapi khas Minangkabau yang kaya rempah",
        "ingredients": [
            "1kg daging sapi",
            "400ml santan kental",
            "200ml santan encer",
            "10 cabai merah",
            "5 cabai keriting",
            "8 bawang merah",
            "6 bawang putih",
            "3cm jahe",
            "3cm lengkuas",
            "2 batang serai",
            "5 lembar daun jeruk",
            "2 lembar daun kunyit",
        ],
        "instructions": [
            "Potong daging sesuai selera",
            "Haluskan semua bumbu",
            "Tumis bumbu halus hingga harum",
            "Masukkan daging, aduk hingga berubah warna",
            "Tuang santan encer, masak hingga daging empuk",
            "Tambahkan santan kental, masak hingga mengental",
            "Masak terus hingga bumbu meresap dan berminyak",
        ],
    },
]


async def seed_recipes(service, recipes=SAMPLE_RECIPES):
    """
    Insert the sample recipes through the regular create path.
    Returns the created recipes as API views.
    """
    created = []
    for data in recipes:
        result = await service.create(data)
        created.append(result["data"])
    log_event("seed_complete", count=len(created))
    return created


def main():
    service = build_recipe_service(get_config_for_service(SERVICE_NAME).db)
    asyncio.run(seed_recipes(service))


if __name__ == "__main__":
    main()
