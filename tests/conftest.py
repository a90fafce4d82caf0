import pytest

from dinomap.glyphs import build_glyphs
from dinomap.loader import load_records
from dinomap.projection import Mercator
from dinomap.scales import size_scale

SAMPLE_CSV = """name,type,diet,length_m,max_ma,min_ma,lng,lat,region,family
Alpha,sauropod,herbivorous,20,150,140,100,40,Asia,Diplodocidae
Beta,sauropod,herbivorous,10,145,140,105,35,Asia,
Gamma,ornithopod,omnivorous,5,126,122,4,50,Europe,Iguanodontidae
Delta,large theropod,carnivorous,12,68,66,-104.5,47.6,North America,Tyrannosauridae
Epsilon,pachycephalosaur,mystery,4,70,65,-104,46,North America,Pachycephalosauridae
"""


@pytest.fixture
def sample_csv(tmp_path):
    path = tmp_path / "dinosaurs.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def records(sample_csv):
    return load_records(str(sample_csv))


@pytest.fixture
def glyphs(records):
    return build_glyphs(records, size_scale(records["length_m"]), Mercator())


@pytest.fixture
def topology():
    # two unit-ish squares sharing no arcs, quantized
    return {
        "type": "Topology",
        "transform": {"scale": [1, 1], "translate": [0, 0]},
        "objects": {
            "countries": {
                "type": "GeometryCollection",
                "geometries": [
                    {"type": "Polygon", "arcs": [[0]], "id": "001", "properties": {"name": "Left"}},
                    {"type": "Polygon", "arcs": [[-2]], "id": "002", "properties": {"name": "Right"}},
                ],
            }
        },
        "arcs": [
            [[0, 0], [10, 0], [0, 10], [-10, 0], [0, -10]],
            [[20, 0], [10, 0], [0, 10], [-10, 0], [0, -10]],
        ],
    }
