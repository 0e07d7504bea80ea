from time import perf_counter

from infotree import (
    EQUAL, LESS_OR_EQUAL, DecisionTreeBuilder, RandomForest, Record, enable_logging,
)

rows = [
    ("sunny", 85, 85, False, "no"), ("sunny", 80, 90, True, "no"),
    ("overcast", 83, 86, False, "yes"), ("rainy", 70, 96, False, "yes"),
    ("rainy", 68, 80, False, "yes"), ("rainy", 65, 70, True, "no"),
    ("overcast", 64, 65, True, "yes"), ("sunny", 72, 95, False, "no"),
    ("sunny", 69, 70, False, "yes"), ("rainy", 75, 80, False, "yes"),
    ("sunny", 75, 70, True, "yes"), ("overcast", 72, 90, True, "yes"),
    ("overcast", 81, 75, False, "yes"), ("rainy", 71, 91, True, "no"),
]
feats = ["outlook", "temperature", "humidity", "windy"]
items = [Record(dict(zip(feats, r[:4])), r[4]) for r in rows]

builder = (DecisionTreeBuilder()
           .set_training_set(items)
           .set_minimal_number_of_items(0)
           .set_default_predicates(EQUAL)
           .set_attribute_predicates("temperature", LESS_OR_EQUAL)
           .set_attribute_predicates("humidity", LESS_OR_EQUAL))

with enable_logging(level="DEBUG"):
    t0 = perf_counter(); tree = builder.create_decision_tree().merge_redundant_rules()
    print(f"fit: {perf_counter()-t0:.3f} s")
tree.print_tree()
for rule in tree.export_rules():
    print(rule)

forest = RandomForest.create(builder, 5, random_state=42)
query = Record({"outlook": "sunny", "temperature": 70, "humidity": 72, "windy": True})
print("votes:", forest.classify(query), "->", forest.predict(query))
