"""
Routes package - flask-restx namespaces, one module per resource family
"""

from flask_restx import Resource

from portfolio.api_responses import created_response, request_payload, success_response
from portfolio.services import get_services


def register_crud(ns, service_name, entity):
    """Standard collection + item resources for a plain CRUD service."""

    def service():
        return getattr(get_services(), service_name)

    @ns.route("")
    class Collection(Resource):
        @ns.doc(f"list_{service_name}")
        def get(self):
            return success_response(service().list())

        @ns.doc(f"create_{service_name}")
        @ns.response(201, f"{entity} created")
        @ns.response(400, "Validation error")
        @ns.response(409, f"{entity} already exists")
        def post(self):
            return created_response(service().create(request_payload()), f"{entity} created successfully")

    @ns.route("/<string:id>")
    @ns.param("id", f"The {entity.lower()} ID")
    @ns.response(404, f"{entity} not found")
    class Item(Resource):
        @ns.doc(f"get_{service_name}")
        def get(self, id):
            return success_response(service().get(id))

        @ns.doc(f"update_{service_name}")
        def put(self, id):
            return success_response(service().update(id, request_payload()), f"{entity} updated successfully")

        @ns.doc(f"delete_{service_name}")
        def delete(self, id):
            service().delete(id)
            return success_response(message=f"{entity} deleted successfully")

    Collection.__name__ = f"{entity.replace(' ', '')}List"
    Item.__name__ = entity.replace(" ", "")
    return Collection, Item
