from flask import Blueprint, jsonify, redirect, request, url_for

from api.pages.rendering import current_admin, render_page, wants_json
from api.schemas.api_responses import ok
from api.services.entity_form import columns_from_form

entities_bp = Blueprint("entities", __name__, url_prefix="/entity")


@entities_bp.route("/<entity>", methods=["GET"])
def entity_list(entity):
    """List rows of a registered entity (select columns, or all)."""
    admin = current_admin()
    ent = admin.registry.require(entity)

    rows, columns = admin.executor.list_rows(
        ent.table_name, ent.primary_key, ent.get_select_columns()
    )

    if wants_json():
        return jsonify(
            ok(
                {
                    "entity": ent.table_name,
                    "columns": columns,
                    "rows": [r.as_dict() for r in rows],
                }
            )
        )

    return render_page(
        "list",
        entity=ent,
        title=ent.title_plural,
        description=ent.description,
        columns=columns,
        rows=rows,
    )


@entities_bp.route("/<entity>/new", methods=["GET"])
def entity_new(entity):
    """Empty creation form built from the discovered column shape."""
    admin = current_admin()
    ent = admin.registry.require(entity)

    row = admin.executor.empty_row(ent.table_name, ent.primary_key, ent.get_new_columns())

    return render_page(
        "new",
        entity=ent,
        title=ent.title_singular,
        description=ent.description,
        row=row,
        is_edit=False,
    )


@entities_bp.route("/<entity>/new", methods=["POST"])
def entity_create(entity):
    admin = current_admin()
    ent = admin.registry.require(entity)

    shape = admin.executor.empty_row(ent.table_name, ent.primary_key, ent.get_new_columns())
    new_id = admin.executor.create(
        ent.table_name, ent.primary_key, columns_from_form(shape, request.form)
    )

    if wants_json():
        return jsonify(ok({"entity": ent.table_name, "id": new_id})), 201
    return redirect(url_for("admin.entities.entity_list", entity=ent.table_name))


@entities_bp.route("/<entity>/<entity_id>", methods=["GET"])
def entity_edit(entity, entity_id):
    admin = current_admin()
    ent = admin.registry.require(entity)

    row = admin.executor.get_by_id(
        ent.table_name, ent.primary_key, ent.get_edit_columns(), entity_id
    )

    if wants_json():
        return jsonify(ok({"entity": ent.table_name, "row": row.as_dict()}))

    return render_page(
        "edit",
        entity=ent,
        title=ent.title_singular,
        description=ent.description,
        entity_id=entity_id,
        row=row,
        is_edit=True,
    )


@entities_bp.route("/<entity>/<entity_id>", methods=["POST"])
def entity_update(entity, entity_id):
    admin = current_admin()
    ent = admin.registry.require(entity)

    shape = admin.executor.empty_row(ent.table_name, ent.primary_key, ent.get_edit_columns())
    admin.executor.update_by_id(
        ent.table_name, ent.primary_key, entity_id, columns_from_form(shape, request.form)
    )

    if wants_json():
        return jsonify(ok({"entity": ent.table_name, "id": entity_id}))
    return redirect(
        url_for("admin.entities.entity_edit", entity=ent.table_name, entity_id=entity_id)
    )


@entities_bp.route("/<entity>/<entity_id>/delete", methods=["GET"])
def entity_delete(entity, entity_id):
    admin = current_admin()
    ent = admin.registry.require(entity)

    admin.executor.delete_by_id(ent.table_name, ent.primary_key, entity_id)

    if wants_json():
        return jsonify(ok({"entity": ent.table_name, "id": entity_id}))
    return redirect(url_for("admin.entities.entity_list", entity=ent.table_name))
