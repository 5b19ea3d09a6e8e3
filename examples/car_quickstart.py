import sys
from time import perf_counter

from id3py import ID3Classifier, load_dataset

path = sys.argv[1] if len(sys.argv) > 1 else "car.data"
ds = load_dataset(path)

t0 = perf_counter(); clf = ID3Classifier().fit_dataset(ds); print(f"fit: {perf_counter()-t0:.3f} s")
clf.print_tree()
for rule in clf.export_rules()[:10]:
    print(rule)
try:
    clf.export_graphviz("car_tree", format="dot")
except RuntimeError as e:
    print(f"Skipping Graphviz export: {e}")
