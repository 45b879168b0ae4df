def test_category_crud(client):
    res = client.post("/categories", json={"name": "Soups"})
    assert res.status_code == 201
    category = res.json()
    assert category["name"] == "Soups"
    category_id = category["categoryId"]

    assert client.get(f"/categories/{category_id}").json() == category
    assert client.get("/categories").json() == [category]

    res = client.put(f"/categories/{category_id}", json={"name": "Stews"})
    assert res.status_code == 200
    assert res.json() == {"categoryId": category_id, "name": "Stews"}

    res = client.delete(f"/categories/{category_id}")
    assert res.status_code == 200
    assert client.get(f"/categories/{category_id}").status_code == 404


def test_missing_category_returns_404(client):
    assert client.get("/categories/7").json() == {"error": "Category not found"}
    assert client.put("/categories/7", json={"name": "x"}).status_code == 404
    assert client.delete("/categories/7").status_code == 404


def test_category_in_use_cannot_be_deleted(client):
    category_id = client.post("/categories", json={"name": "Drinks"}).json()["categoryId"]
    client.post("/recipes", json={
        "title": "Lemonade",
        "instructions": "Squeeze",
        "categoryId": category_id,
        "ingredients": [{"name": "Lemon", "quantity": 2, "unit": "pc"}],
    })

    res = client.delete(f"/categories/{category_id}")
    assert res.status_code == 409
    assert "error" in res.json()
    assert client.get(f"/categories/{category_id}").status_code == 200
    assert len(client.get(f"/recipes/category/{category_id}").json()) == 1


def test_tag_crud(client):
    res = client.post("/tags", json={"name": "vegan"})
    assert res.status_code == 201
    tag = res.json()
    tag_id = tag["tagId"]

    assert client.get("/tags").json() == [tag]
    assert client.get(f"/tags/{tag_id}").json() == tag

    res = client.put(f"/tags/{tag_id}", json={"name": "vegetarian"})
    assert res.json() == {"tagId": tag_id, "name": "vegetarian"}

    res = client.delete(f"/tags/{tag_id}")
    assert res.json() == {"message": "Tag deleted successfully"}
    assert client.get(f"/tags/{tag_id}").json() == {"error": "Tag not found"}


def test_duplicate_tag_name_conflicts(client):
    assert client.post("/tags", json={"name": "quick"}).status_code == 201
    res = client.post("/tags", json={"name": "quick"})
    assert res.status_code == 409
    assert len(client.get("/tags").json()) == 1


def test_blank_tag_name_is_rejected(client):
    res = client.post("/tags", json={"name": "  "})
    assert res.status_code == 400


def test_ingredient_catalog_is_filled_by_recipe_writes(client):
    category_id = client.post("/categories", json={"name": "Breakfast"}).json()["categoryId"]
    client.post("/recipes", json={
        "title": "Toast",
        "instructions": "Toast it",
        "categoryId": category_id,
        "ingredients": [
            {"name": "Bread", "quantity": 2, "unit": "slice"},
            {"name": "Butter", "quantity": 1, "unit": "tsp"},
        ],
    })

    ingredients = client.get("/ingredients").json()
    assert [i["name"] for i in ingredients] == ["Bread", "Butter"]

    bread = ingredients[0]
    assert client.get(f"/ingredients/{bread['ingredientId']}").json() == bread
    assert client.get("/ingredients/999").status_code == 404
