import numpy as np
from infotree import EntropyForestClassifier, EntropyTreeClassifier


def test_tree_smoke():
    X = np.array([[1,'A'],[2,'A'],[3,'B'],[4,'B']], dtype=object)
    y = np.array([0,0,1,1])
    clf = EntropyTreeClassifier(categorical_features=[1], feature_names=['num','cat'], minimal_number_of_items=1)
    clf.fit(X,y)
    _ = clf.predict(X)
    _ = clf.export_rules()


def test_forest_smoke():
    X = np.array([[1.0,'A'],[2.0,'A'],[3.0,'B'],[4.0,'B']], dtype=object)
    y = np.array(['no','no','yes','yes'])
    clf = EntropyForestClassifier(categorical_features=['cat'], feature_names=['num','cat'], n_estimators=2, random_state=0)
    clf.fit(X,y)
    _ = clf.predict(X)
    _ = clf.predict_proba(X)
