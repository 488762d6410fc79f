from flask import request
from flask_restx import Namespace, Resource, fields

from portfolio.api_responses import created_response, query_flag, request_payload, success_response
from portfolio.services import get_services

ns_projects = Namespace("projects", description="Portfolio projects")
ns_tags = Namespace("tags", description="Project tags")
ns_project_tags = Namespace("project-tags", description="Tags attached to one project")

tag_model = ns_tags.model("ProjectTag", {
    "name": fields.String(required=True, description="Unique tag name"),
    "color": fields.String(description="Hex color, e.g. #00ADD8"),
})

project_model = ns_projects.model("Project", {
    "title": fields.String(required=True),
    "description": fields.String(required=True),
    "image_url": fields.String,
    "demo_url": fields.String(default="#"),
    "code_url": fields.String(default="#"),
    "display_order": fields.Integer(default=0),
    "is_featured": fields.Boolean(default=False),
    "status": fields.String(default="published"),
    "tags": fields.List(fields.String, description="Tag names, created on demand"),
})

link_model = ns_project_tags.model("ProjectTagLink", {
    "tag_id": fields.String(required=True),
})


@ns_projects.route("")
class ProjectList(Resource):
    @ns_projects.doc("list_projects", params={"with_tags": "Attach tags (default true)"})
    def get(self):
        """List projects in display order"""
        return success_response(get_services().projects.list(with_tags=query_flag("with_tags", True)))

    @ns_projects.doc("create_project")
    @ns_projects.expect(project_model, validate=False)
    @ns_projects.response(201, "Project created")
    def post(self):
        """Create a project from a JSON body"""
        project = get_services().projects.create(request_payload())
        return created_response(project, "Project created successfully")


@ns_projects.route("/with-image")
class ProjectWithImage(Resource):
    @ns_projects.doc("create_project_with_image")
    @ns_projects.response(201, "Project created")
    def post(self):
        """Create a project from a multipart form with an optional `image` file"""
        project = get_services().projects.create(request_payload(), image=request.files.get("image"))
        return created_response(project, "Project created successfully")


@ns_projects.route("/<string:id>")
@ns_projects.param("id", "The project ID")
@ns_projects.response(404, "Project not found")
class ProjectItem(Resource):
    @ns_projects.doc("get_project", params={"with_tags": "Attach tags (default true)"})
    def get(self, id):
        return success_response(get_services().projects.get(id, with_tags=query_flag("with_tags", True)))

    @ns_projects.doc("update_project")
    def put(self, id):
        """Partial update; JSON or multipart with an optional replacement `image`"""
        project = get_services().projects.update(id, request_payload(), image=request.files.get("image"))
        return success_response(project, "Project updated successfully")

    @ns_projects.doc("delete_project")
    def delete(self, id):
        get_services().projects.delete(id)
        return success_response(message="Project deleted successfully")


@ns_tags.route("")
class TagList(Resource):
    @ns_tags.doc("list_tags")
    def get(self):
        """All project tags ordered by name"""
        return success_response(get_services().projects.list_tags())

    @ns_tags.doc("create_tag")
    @ns_tags.expect(tag_model, validate=False)
    @ns_tags.response(409, "Tag already exists")
    def post(self):
        return created_response(get_services().projects.create_tag(request_payload()), "Tag created successfully")


@ns_tags.route("/<string:tag_id>")
@ns_tags.response(404, "Tag not found")
class TagItem(Resource):
    @ns_tags.doc("delete_tag")
    def delete(self, tag_id):
        """Delete a tag and detach it from every project"""
        get_services().projects.delete_tag(tag_id)
        return success_response(message="Tag deleted successfully")


@ns_tags.route("/<string:tag_id>/projects")
@ns_tags.response(404, "Tag not found")
class TagProjects(Resource):
    @ns_tags.doc("list_projects_by_tag")
    def get(self, tag_id):
        return success_response(get_services().projects.projects_by_tag(tag_id))


@ns_project_tags.route("/<string:project_id>/tags")
@ns_project_tags.response(404, "Project not found")
class ProjectTagList(Resource):
    @ns_project_tags.doc("get_project_tags")
    def get(self, project_id):
        return success_response(get_services().projects.project_tags(project_id))

    @ns_project_tags.doc("add_project_tag")
    @ns_project_tags.expect(link_model, validate=False)
    @ns_project_tags.response(409, "Tag already added to project")
    def post(self, project_id):
        project = get_services().projects.add_tag(project_id, request_payload())
        return success_response(project, "Tag added to project successfully")


@ns_project_tags.route("/<string:project_id>/tags/<string:tag_id>")
class ProjectTagItem(Resource):
    @ns_project_tags.doc("remove_project_tag")
    def delete(self, project_id, tag_id):
        project = get_services().projects.remove_tag(project_id, tag_id)
        return success_response(project, "Tag removed from project successfully")
