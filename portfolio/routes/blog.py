from flask_restx import Namespace, Resource, fields

from portfolio.api_responses import created_response, request_payload, success_response
from portfolio.services import get_services

ns_blog = Namespace("blog", description="Blog posts and blog tags")

post_model = ns_blog.model("BlogPost", {
    "title": fields.String(required=True),
    "slug": fields.String(required=True),
    "content": fields.String,
    "excerpt": fields.String,
    "featured_image": fields.String,
    "publish_date": fields.DateTime,
    "status": fields.String(default="draft", enum=["draft", "published", "archived"]),
    "tags": fields.List(fields.String),
})


@ns_blog.route("")
class BlogPostList(Resource):
    @ns_blog.doc("list_blog_posts")
    def get(self):
        """All posts, newest first"""
        return success_response(get_services().blog.list())

    @ns_blog.doc("create_blog_post")
    @ns_blog.expect(post_model, validate=False)
    @ns_blog.response(409, "Slug already in use")
    def post(self):
        return created_response(get_services().blog.create(request_payload()), "Blog post created successfully")


@ns_blog.route("/published")
class PublishedBlogPosts(Resource):
    @ns_blog.doc("list_published_blog_posts")
    def get(self):
        """Published posts, most recent publish date first"""
        return success_response(get_services().blog.list_published())


@ns_blog.route("/tags")
class BlogTagList(Resource):
    @ns_blog.doc("list_blog_tags")
    def get(self):
        return success_response(get_services().blog.list_tags())

    @ns_blog.doc("create_blog_tag")
    @ns_blog.response(409, "Tag already exists")
    def post(self):
        return created_response(get_services().blog.create_tag(request_payload()), "Tag created successfully")


@ns_blog.route("/slug/<string:slug>")
@ns_blog.response(404, "Blog post not found")
class BlogPostBySlug(Resource):
    @ns_blog.doc("get_blog_post_by_slug")
    def get(self, slug):
        """Fetch a post by slug; counts as a view"""
        return success_response(get_services().blog.get_by_slug(slug))


@ns_blog.route("/<string:id>")
@ns_blog.param("id", "The blog post ID")
@ns_blog.response(404, "Blog post not found")
class BlogPostItem(Resource):
    @ns_blog.doc("get_blog_post")
    def get(self, id):
        """Fetch a post by ID; counts as a view"""
        return success_response(get_services().blog.get(id))

    @ns_blog.doc("update_blog_post")
    def put(self, id):
        return success_response(get_services().blog.update(id, request_payload()), "Blog post updated successfully")

    @ns_blog.doc("delete_blog_post")
    def delete(self, id):
        get_services().blog.delete(id)
        return success_response(message="Blog post deleted successfully")
