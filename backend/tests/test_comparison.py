from productcompare.core.comparison import (
    feature_rows,
    find_common_features,
    normalize_key,
    presentable_features,
    same_category,
)
from productcompare.schemas.comparison import CommonFeature
from productcompare.schemas.product import ProductRecord


def make_record(info=None, title="Product", category_id=None):
    return ProductRecord(title=title, product_information=info or {}, category_id=category_id)


def test_normalize_key():
    assert normalize_key("Item Weight") == "itemweight"
    assert normalize_key("item_weight") == "itemweight"
    assert normalize_key("Item -  _Weight") == "itemweight"
    assert normalize_key(None) == ""


def test_item_weight_matches_across_spellings():
    a = make_record({"Item Weight": "1 lb"})
    b = make_record({"item_weight": "2 lb"})

    features = find_common_features(a, b)
    assert features == [
        CommonFeature(product1_key="Item Weight", product2_key="item_weight", normalized_key="itemweight")
    ]


def test_no_information_means_no_features():
    assert find_common_features(make_record(), make_record({"Color": "Red"})) == []
    assert find_common_features(make_record(), make_record()) == []


def test_swapping_records_mirrors_pairs():
    a = make_record({"Item Weight": "1 lb", "Color": "Red", "Brand": "Acme", "Only A": "x"})
    b = make_record({"brand": "Other", "item-weight": "2 lb", "COLOR": "Blue", "Only B": "y"})

    forward = {(f.normalized_key, f.product1_key, f.product2_key) for f in find_common_features(a, b)}
    backward = {(f.normalized_key, f.product2_key, f.product1_key) for f in find_common_features(b, a)}

    assert forward == backward
    assert {nk for nk, _, _ in forward} == {"itemweight", "color", "brand"}


def test_order_follows_first_record():
    a = make_record({"Zeta": "1", "Alpha": "2", "Mid": "3"})
    b = make_record({"alpha": "x", "mid": "y", "zeta": "z"})
    assert [f.product1_key for f in find_common_features(a, b)] == ["Zeta", "Alpha", "Mid"]


def test_collision_within_a_side_last_write_wins():
    a = make_record({"Item Weight": "1 lb", "item_weight": "16 oz"})
    b = make_record({"ItemWeight": "2 lb"})
    (feature,) = find_common_features(a, b)
    assert feature.product1_key == "item_weight"
    assert feature.product2_key == "ItemWeight"


def test_presentable_features_drops_reviews_and_sorts():
    features = [
        CommonFeature(product1_key="Weight", product2_key="weight", normalized_key="weight"),
        CommonFeature(product1_key="Customer Reviews", product2_key="Customer Reviews", normalized_key="customerreviews"),
        CommonFeature(product1_key="customer reviews count", product2_key="x", normalized_key="customerreviewscount"),
        CommonFeature(product1_key="Brand", product2_key="brand", normalized_key="brand"),
        CommonFeature(product1_key="ASIN", product2_key="asin", normalized_key="asin"),
    ]
    assert [f.product1_key for f in presentable_features(features)] == ["ASIN", "Brand", "Weight"]


def test_feature_rows_pair_values():
    a = make_record({"Color": "Red", "Customer Reviews": "4.5 stars", "Item Weight": ""})
    b = make_record({"color": "Blue", "Customer Reviews": "4.1 stars", "item weight": "2 lb"})
    rows = feature_rows(a, b)
    assert [(r.feature, r.product1_value, r.product2_value) for r in rows] == [
        ("Color", "Red", "Blue"),
        ("Item Weight", "N/A", "2 lb"),
    ]


def test_same_category():
    assert same_category(make_record(category_id="172282"), make_record(category_id="172282"))
    assert not same_category(make_record(category_id="172282"), make_record(category_id="2335752011"))
    assert not same_category(make_record(), make_record())
