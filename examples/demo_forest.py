import json
from pygraphforest import Forest

adjacency_list = {
    "0": ["2", "3"],
    "1": ["4", "5"],
    "2": ["6", "7"],
    "3": [],
    "4": ["11"],
    "5": ["12", "13"],
    "6": [],
    "7": [],
    "8": ["3"],
    "9": ["3"],
    "10": ["3"],
    "11": [],
    "12": [],
    "13": [],
    "14": ["5"],
}

forest = Forest(adjacency_list, mode="undirected")
print(f"{len(forest)} components, roots {forest.roots}")
print(json.dumps(forest.to_dict(), indent=2))

# join the two trees, then break the result apart again
forest.insert_edge("7", "14")
print(f"after insert: {len(forest)} components, roots {forest.roots}")
forest.remove_node("2")
print(f"after remove: {len(forest)} components, roots {forest.roots}")
